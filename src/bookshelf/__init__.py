"""Bookshelf - REST backend for a book catalog."""

__version__ = "1.0.0"
