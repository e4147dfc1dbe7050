"""Kubeconfig data model with the fields kind inspects, plus kind helpers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


def _mapping(value: Any, what: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError(f"{what} must be a mapping, got {type(value).__name__}")
    return dict(value)


def _sequence(value: Any, what: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{what} must be a list, got {type(value).__name__}")
    return value


def _string(value: Any, what: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    raise ValueError(f"{what} must be a string, got {type(value).__name__}")


@dataclass
class Cluster:
    """How to reach a kubernetes cluster; unknown fields are kept verbatim."""

    server: str = ""
    other_fields: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def _from_dict(cls, data: Any) -> Cluster:
        fields = _mapping(data, "cluster")
        server = _string(fields.pop("server", None), "cluster.server")
        return cls(server=server, other_fields=fields)

    def _to_dict(self) -> dict[str, Any]:
        out = dict(self.other_fields)
        if self.server:
            out["server"] = self.server
        return out


@dataclass
class NamedCluster:
    """A cluster entry with its nickname."""

    name: str = ""
    cluster: Cluster = field(default_factory=Cluster)

    @classmethod
    def _from_dict(cls, data: Any) -> NamedCluster:
        fields = _mapping(data, "clusters entry")
        return cls(
            name=_string(fields.get("name"), "clusters.name"),
            cluster=Cluster._from_dict(fields.get("cluster")),
        )

    def _to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "cluster": self.cluster._to_dict()}


@dataclass
class NamedUser:
    """A user entry with its nickname; the user data is kept untouched."""

    name: str = ""
    user: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def _from_dict(cls, data: Any) -> NamedUser:
        fields = _mapping(data, "users entry")
        return cls(
            name=_string(fields.get("name"), "users.name"),
            user=_mapping(fields.get("user"), "users.user"),
        )

    def _to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "user": dict(self.user)}


@dataclass
class Context:
    """References to a cluster and a user; unknown fields are kept verbatim."""

    cluster: str = ""
    user: str = ""
    other_fields: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def _from_dict(cls, data: Any) -> Context:
        fields = _mapping(data, "context")
        cluster = _string(fields.pop("cluster", None), "context.cluster")
        user = _string(fields.pop("user", None), "context.user")
        return cls(cluster=cluster, user=user, other_fields=fields)

    def _to_dict(self) -> dict[str, Any]:
        out = dict(self.other_fields)
        out["cluster"] = self.cluster
        out["user"] = self.user
        return out


@dataclass
class NamedContext:
    """A context entry with its nickname."""

    name: str = ""
    context: Context = field(default_factory=Context)

    @classmethod
    def _from_dict(cls, data: Any) -> NamedContext:
        fields = _mapping(data, "contexts entry")
        return cls(
            name=_string(fields.get("name"), "contexts.name"),
            context=Context._from_dict(fields.get("context")),
        )

    def _to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "context": self.context._to_dict()}


@dataclass
class Config:
    """A KUBECONFIG; fields kind does not touch live in ``other_fields``."""

    clusters: list[NamedCluster] = field(default_factory=list)
    users: list[NamedUser] = field(default_factory=list)
    contexts: list[NamedContext] = field(default_factory=list)
    current_context: str = ""
    other_fields: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> Config:
        """Build a Config from decoded YAML data (``None`` gives an empty one)."""
        fields = _mapping(data, "KUBECONFIG")
        clusters = [
            NamedCluster._from_dict(item)
            for item in _sequence(fields.pop("clusters", None), "clusters")
        ]
        users = [
            NamedUser._from_dict(item)
            for item in _sequence(fields.pop("users", None), "users")
        ]
        contexts = [
            NamedContext._from_dict(item)
            for item in _sequence(fields.pop("contexts", None), "contexts")
        ]
        current = _string(fields.pop("current-context", None), "current-context")
        return cls(
            clusters=clusters,
            users=users,
            contexts=contexts,
            current_context=current,
            other_fields=fields,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return plain data for YAML output, leaving out empty known fields."""
        out = dict(self.other_fields)
        if self.clusters:
            out["clusters"] = [c._to_dict() for c in self.clusters]
        if self.users:
            out["users"] = [u._to_dict() for u in self.users]
        if self.contexts:
            out["contexts"] = [c._to_dict() for c in self.contexts]
        if self.current_context:
            out["current-context"] = self.current_context
        return out


def kind_cluster_key(cluster_name: str) -> str:
    """Return the name identifying a kind cluster in kubeconfig files."""
    return "kind-" + cluster_name


def check_kubeadm_expectations(cfg: Config) -> None:
    """Raise ValueError unless cfg has exactly one cluster, user and context."""
    if len(cfg.clusters) != 1:
        raise ValueError(
            f"kubeadm KUBECONFIG should have one cluster, but read {len(cfg.clusters)}"
        )
    if len(cfg.users) != 1:
        raise ValueError(
            f"kubeadm KUBECONFIG should have one user, but read {len(cfg.users)}"
        )
    if len(cfg.contexts) != 1:
        raise ValueError(
            f"kubeadm KUBECONFIG should have one context, but read {len(cfg.contexts)}"
        )