"""Typeahead - search-as-you-type interest suggestions."""

__version__ = "0.1.0"
