"""Logging and metrics for the Karmada console."""
