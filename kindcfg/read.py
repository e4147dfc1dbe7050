"""Reading kubeconfig files and deriving kind kubeconfigs from kubeadm ones."""

from __future__ import annotations

import yaml

from .types import Config, check_kubeadm_expectations, kind_cluster_key


def _decode(raw: str) -> Config:
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ValueError(f"failed to parse KUBECONFIG: {exc}") from exc
    return Config.from_dict(data)


def kind_from_raw_kubeadm(raw_kubeadm_kubeconfig: str, cluster_name: str, server: str = "") -> Config:
    """Return a kind kubeconfig built from a raw kubeadm one.

    All names are replaced with the kind cluster key; ``server`` replaces the
    cluster endpoint when it is non-empty.
    """
    cfg = _decode(raw_kubeadm_kubeconfig)
    check_kubeadm_expectations(cfg)

    key = kind_cluster_key(cluster_name)
    cfg.clusters[0].name = key
    cfg.users[0].name = key
    cfg.contexts[0].name = key
    cfg.contexts[0].context.user = key
    cfg.contexts[0].context.cluster = key
    cfg.current_context = key

    if server:
        cfg.clusters[0].cluster.server = server
    return cfg


def read_config(config_path: str) -> Config:
    """Load the kubeconfig at config_path; a missing file gives an empty Config."""
    try:
        with open(config_path, encoding="utf-8") as handle:
            raw = handle.read()
    except FileNotFoundError:
        return Config()
    return _decode(raw)