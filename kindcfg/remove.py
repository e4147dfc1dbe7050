"""Removing kind cluster entries from kubeconfig files."""

from __future__ import annotations

import os

from .lock import locked
from .paths import paths
from .read import read_config
from .types import Config, kind_cluster_key
from .write import write_config


def remove(cfg: Config, kind_cluster_name: str) -> bool:
    """Drop the kind cluster's entries from cfg; return True if anything changed."""
    key = kind_cluster_key(kind_cluster_name)

    clusters = [c for c in cfg.clusters if c.name != key]
    users = [u for u in cfg.users if u.name != key]
    contexts = [c for c in cfg.contexts if c.name != key]

    mutated = (
        len(clusters) != len(cfg.clusters)
        or len(users) != len(cfg.users)
        or len(contexts) != len(cfg.contexts)
    )
    cfg.clusters = clusters
    cfg.users = users
    cfg.contexts = contexts

    if cfg.current_context == key:
        cfg.current_context = ""
        mutated = True
    return mutated


def remove_kind(kind_cluster_name: str, explicit_path: str) -> None:
    """Remove the kind cluster from every kubeconfig file that applies.

    Files are only rewritten when something was removed from them.
    """
    for config_path in paths(explicit_path, os.environ.get):
        with locked(config_path):
            existing = read_config(config_path)
            if remove(existing, kind_cluster_name):
                write_config(existing, config_path)