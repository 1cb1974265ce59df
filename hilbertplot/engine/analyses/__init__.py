"""Registered plot analyses, one module per analysis."""
