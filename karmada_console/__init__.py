"""Karmada console backend: ArgoCD application views over member clusters."""

__version__ = "0.3.0"
