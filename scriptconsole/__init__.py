"""Script Console, an interactive line-by-line scripting session."""

__version__ = "1.0.0"
