"""Fit engine: progressive overload, mesocycle scheduling and nutrition tracking."""
