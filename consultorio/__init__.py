"""Console appointment manager for a medical practice: records, file stores, managers and menus."""

__version__ = "0.1.0"