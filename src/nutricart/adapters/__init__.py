"""Persistence adapters for household state."""
