"""Immutable per-city dataset snapshots."""
