"""
Steam Mac Check.

Sorts the games in a Steam library by whether they run on a
given operating system (macOS by default).
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
