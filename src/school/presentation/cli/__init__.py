"""Command-line interface for the School API."""
