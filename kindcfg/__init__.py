"""Kubeconfig management, load balancer configuration and node helpers for local container-based Kubernetes clusters."""

__version__ = "0.1.0"