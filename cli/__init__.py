"""Command line interface for opennbs."""
