"""Mortgage ROI engine: compare two loans and project investing the difference."""
__version__ = "0.1.0"
