"""Rendering helpers for the dirplay TUI."""
