"""Embedded font files."""
