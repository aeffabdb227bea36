"""Loading and export helpers."""
