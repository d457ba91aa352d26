"""Progression engine and its configuration loader."""
