"""Command line interface for LoudQC."""
