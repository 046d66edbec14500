"""Core reconciliation logic for accountctl."""
