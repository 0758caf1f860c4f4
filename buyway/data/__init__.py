"""Bundled data files (seed catalog)."""
