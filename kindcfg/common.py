"""Helpers shared by node providers: ports, names, proxies, images, logs."""

from __future__ import annotations

import functools
import os
import re
import socket
from collections.abc import Callable
from typing import IO, Any

API_SERVER_INTERNAL_PORT = 6443
"""Port the control plane listens on inside the node network."""

HTTP_PROXY = "HTTP_PROXY"
HTTPS_PROXY = "HTTPS_PROXY"
NO_PROXY = "NO_PROXY"

_PROXY_VARIABLES = (HTTP_PROXY, HTTPS_PROXY, NO_PROXY)


def port_or_get_free_port(port: int, listen_addr: str) -> int:
    """Return port if set, 0 for -1 (let the backend pick), else a free port."""
    if port == -1:
        return 0
    if port == 0:
        return get_free_port(listen_addr)
    return port


def get_free_port(listen_addr: str) -> int:
    """Return a TCP port that is currently free on listen_addr.

    Raises OSError if the address cannot be resolved or bound.
    """
    host = listen_addr or None
    infos = socket.getaddrinfo(
        host, 0, type=socket.SOCK_STREAM, flags=socket.AI_PASSIVE
    )
    last_error: OSError | None = None
    for family, socktype, proto, _, sockaddr in infos:
        try:
            with socket.socket(family, socktype, proto) as sock:
                sock.bind(sockaddr)
                sock.listen(1)
                return int(sock.getsockname()[1])
        except OSError as exc:
            last_error = exc
    raise last_error or OSError(f"could not listen on {listen_addr!r}")


def make_node_namer(cluster_name: str) -> Callable[[str], str]:
    """Return a function naming nodes by role, numbering repeats from 2."""
    counts: dict[str, int] = {}

    def name_node(role: str) -> str:
        count = counts.get(role, 0) + 1
        counts[role] = count
        suffix = str(count) if count > 1 else ""
        return f"{cluster_name}-{role}{suffix}"

    return name_node


def get_proxy_envs(
    cfg: Any, get_env: Callable[[str], str | None] | None = None
) -> dict[str, str]:
    """Return the proxy environment variables to pass to nodes.

    Each variable is looked up upper case first, then lower case, and is
    returned under both spellings. When any proxy is set, the cluster's
    service and pod subnets (``cfg.networking.service_subnet`` and
    ``cfg.networking.pod_subnet``) are appended to NO_PROXY.
    """
    lookup = get_env if get_env is not None else os.environ.get
    envs: dict[str, str] = {}
    for name in _PROXY_VARIABLES:
        value = lookup(name) or lookup(name.lower()) or ""
        if value:
            envs[name] = value
            envs[name.lower()] = value

    if envs:
        networking = cfg.networking
        subnets = f"{networking.service_subnet},{networking.pod_subnet}"
        current = envs.get(NO_PROXY, "")
        no_proxy = f"{current},{subnets}" if current else subnets
        envs[NO_PROXY] = no_proxy
        envs[NO_PROXY.lower()] = no_proxy
    return envs


def required_node_images(cfg: Any) -> set[str]:
    """Return the set of node images named by ``cfg.nodes``."""
    return {node.image for node in cfg.nodes}


def file_on_host(path: str) -> IO[bytes]:
    """Create (or truncate) the file at path, creating parent directories."""
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    return open(path, "w+b")


@functools.lru_cache(maxsize=None)
def node_reached_cgroups_ready_regexp() -> re.Pattern[str]:
    """Return the pattern of a node log line showing cgroups are ready.

    It matches the systemd multi-user target being reached (cgroup v2) or
    the entrypoint reporting cgroup v1.
    """
    return re.compile(r"Reached target .*Multi-User System.*|detected cgroup v1")