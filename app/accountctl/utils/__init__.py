"""Shared helpers: subprocess execution and console output."""
