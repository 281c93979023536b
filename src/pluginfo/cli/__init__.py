"""Command line interface for pluginfo."""
