"""KubeAgent command-line interface.

Exposes:
    cli -- Click group entry point (registered as ``kubeagent`` script).
"""

from kubeagent.cli.main import cli

__all__ = ["cli"]
