"""Persistence for the key-value store."""
