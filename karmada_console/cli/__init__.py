"""Karmada console command-line interface.

Exposes:
    cli -- Click group entry point (registered as ``karmada-console`` script).
"""

from karmada_console.cli.main import cli

__all__ = ["cli"]
