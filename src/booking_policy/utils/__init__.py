"""Shared helpers for logging and display formatting."""
