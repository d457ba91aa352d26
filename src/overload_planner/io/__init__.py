"""Payload parsing and serialization."""
