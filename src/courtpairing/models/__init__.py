"""Data models for Court Pairing."""
