"""Serialization and hashing helpers."""
