"""Logging and metrics for KubeAgent."""

from kubeagent.observability.logging import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
