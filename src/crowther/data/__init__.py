"""Packaged world data."""
