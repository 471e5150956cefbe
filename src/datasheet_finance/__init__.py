"""Financial summaries and product splits for loosely structured datasheets."""

__version__ = "0.1.0"
