"""Boot configuration parsing, compiling and exporting for an in-memory table store."""

__version__ = "0.1.0"

__all__ = ["model", "parser", "store", "cli"]