"""Persistence core: workspace registry and per-workspace goal store."""
