"""Command line interface for pynotesync."""
