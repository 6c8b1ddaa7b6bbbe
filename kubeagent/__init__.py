"""KubeAgent: a simulated Kubernetes cluster with command emulation and alerting."""

__version__ = "0.1.0"
