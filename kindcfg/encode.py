"""Serialisation of kubeconfig data to normalised YAML."""

from __future__ import annotations

import json

import yaml

from .types import Config


def encode(cfg: Config) -> str:
    """Encode cfg as YAML with sorted keys; an empty config gives ``""``."""
    try:
        # a JSON round trip normalises values the same way other tools do
        normalized = json.loads(json.dumps(cfg.to_dict(), default=str))
    except (TypeError, ValueError) as exc:
        raise ValueError(f"failed to encode KUBECONFIG: {exc}") from exc
    if not normalized:
        return ""
    return yaml.safe_dump(
        normalized,
        default_flow_style=False,
        sort_keys=True,
        allow_unicode=True,
    )