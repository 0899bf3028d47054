"""
Scheduler Layer - Run the tracking cycle on a fixed interval.

Runs the action once on start, then re-fires it from a repeating timer
until stopped. A non-blocking lock keeps cycles from overlapping: a
firing that lands while a cycle is still running is skipped.
"""

import sys
import threading
import time
import traceback
from typing import Callable, Optional


def minutes_to_seconds(minutes: float) -> float:
    return minutes * 60.0


class Scheduler:
    """Owns the repeating timer that drives tracking cycles."""

    def __init__(self, action: Callable[[], object], interval_seconds: float):
        if interval_seconds <= 0:
            raise ValueError("interval must be positive")
        self.action = action
        self.interval_seconds = interval_seconds
        self.timer: Optional[threading.Timer] = None
        self.cycle_lock = threading.Lock()
        self.state_lock = threading.Lock()
        self.running = False
        self.skipped = 0

    def start(self) -> None:
        """Run one cycle immediately, then begin repeating.

        Raises:
            RuntimeError: If the scheduler is already running
        """
        with self.state_lock:
            if self.running:
                raise RuntimeError("Scheduler is already running")
            self.running = True
        self._run_once()
        with self.state_lock:
            if self.running:
                self._arm()

    def stop(self) -> None:
        with self.state_lock:
            self.running = False
            if self.timer is not None:
                self.timer.cancel()
                self.timer = None

    def trigger(self) -> bool:
        """Run a cycle now unless one is already in progress."""
        if not self.running:
            return False
        return self._run_once()

    def run_forever(self) -> None:
        """Start and keep the main thread alive until interrupted."""
        self.start()
        try:
            while self.running:
                time.sleep(1)
        except KeyboardInterrupt:
            print("\nStopping work tracker...")
        finally:
            self.stop()

    def _arm(self) -> None:
        self.timer = threading.Timer(self.interval_seconds, self._on_timer)
        self.timer.daemon = True
        self.timer.start()

    def _on_timer(self) -> None:
        # Re-arm first so the interval is measured between starts.
        with self.state_lock:
            if not self.running:
                return
            self._arm()
        self._run_once()

    def _run_once(self) -> bool:
        if not self.cycle_lock.acquire(blocking=False):
            self.skipped += 1
            print("Skipping cycle: previous cycle still running", file=sys.stderr)
            return False
        try:
            self.action()
        except Exception as e:
            print(f"Error during tracking cycle: {e}", file=sys.stderr)
            traceback.print_exc()
        finally:
            self.cycle_lock.release()
        return True
