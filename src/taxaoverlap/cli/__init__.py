"""Command line interface for TAXA-overlap."""
