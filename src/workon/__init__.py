"""workon: open a terminal and an editor on a local Go module."""

__version__ = "0.3.0"
