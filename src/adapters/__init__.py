"""Driving adapters (CLIs and user interfaces)."""
