"""galias - friendly shims around everyday git commands."""

__version__ = "0.4.0"
