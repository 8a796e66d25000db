"""Command-line interface for the osu! song synchronizer."""
