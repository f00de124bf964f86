"""API service helpers."""
