"""Static detection of null-pointer dereferences over a small IR."""

__version__ = "0.1.0"
__all__ = ["__version__"]