"""Command-line interface for tb-install."""
