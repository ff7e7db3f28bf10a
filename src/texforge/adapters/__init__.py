"""Adapters bridging the builder to LaTeX specifics."""
