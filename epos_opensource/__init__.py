"""epos-opensource — install, list and remove EPOS environments."""

__version__ = "0.1.0"
