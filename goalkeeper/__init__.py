"""Goalkeeper - per-workspace goals, plans and learnings stored on disk."""
