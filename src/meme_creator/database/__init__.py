"""Database connection helpers."""
