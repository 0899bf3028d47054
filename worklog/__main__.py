"""
Entry point for ``python -m worklog``.
"""

from .cli import main

if __name__ == '__main__':
    main()
