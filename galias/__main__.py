"""
Entry point for ``python -m galias <tool> [args...]``.
"""

from .cli import main

if __name__ == "__main__":
    main()
