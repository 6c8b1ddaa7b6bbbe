"""Command interpreter for KubeAgent.

Submodules:
    interpreter -- CommandInterpreter: ordered route table over command strings.
    transcripts -- Canned terminal output templates.
"""

from kubeagent.commands.interpreter import CommandInterpreter

__all__ = ["CommandInterpreter"]
