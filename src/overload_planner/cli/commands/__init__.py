"""CLI command modules; importing them registers their commands on the app."""
