"""Merging a kind kubeconfig into an existing kubeconfig file."""

from __future__ import annotations

import os
from typing import TypeVar

from .lock import locked
from .paths import path_for_merge
from .read import read_config
from .types import Config, check_kubeadm_expectations
from .write import write_config

_Entry = TypeVar("_Entry")


def _upsert(entries: list[_Entry], new: _Entry) -> list[_Entry]:
    """Replace every entry named like new, or append new if none is."""
    name = new.name  # type: ignore[attr-defined]
    if any(entry.name == name for entry in entries):  # type: ignore[attr-defined]
        return [new if entry.name == name else entry for entry in entries]  # type: ignore[attr-defined]
    return [*entries, new]


def merge(existing: Config, kind: Config) -> None:
    """Merge the kind config into existing, in place.

    Entries with matching names are replaced, others appended, and the
    current context is set to kind's. Raises ValueError if kind does not
    hold exactly one cluster, user and context.
    """
    check_kubeadm_expectations(kind)

    existing.clusters = _upsert(existing.clusters, kind.clusters[0])
    existing.users = _upsert(existing.users, kind.users[0])
    existing.contexts = _upsert(existing.contexts, kind.contexts[0])
    existing.current_context = kind.current_context

    # some clients rely on apiVersion and kind being present
    if not existing.other_fields:
        existing.other_fields = dict(kind.other_fields)


def write_merged(kind_config: Config, explicit_config_path: str) -> None:
    """Merge kind_config into the kubeconfig kubectl would write to.

    The target file is locked while it is read, merged and written back.
    """
    config_path = path_for_merge(explicit_config_path, os.environ.get)
    with locked(config_path):
        existing = read_config(config_path)
        merge(existing, kind_config)
        write_config(existing, config_path)