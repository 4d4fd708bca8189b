"""Core engine for filecleaner.

This package contains the directory cleaner, its error hierarchy and
configuration handling.
"""
