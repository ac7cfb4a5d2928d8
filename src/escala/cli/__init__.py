"""Command-line interface for escala."""
