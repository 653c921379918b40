"""Controllers coordinating models and algorithms."""
