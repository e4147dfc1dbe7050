"""Configuration of the external load balancer in front of control planes."""

from __future__ import annotations

from dataclasses import dataclass, field

IMAGE = "kindest/haproxy:v20220607-9a4d8d2a"
"""The load balancer image and tag."""

CONFIG_PATH = "/usr/local/etc/haproxy/haproxy.cfg"
"""Path of the configuration file inside the image."""

_PREAMBLE = """# generated by kind
global
  log /dev/log local0
  log /dev/log local1 notice
  daemon

resolvers docker
  nameserver dns 127.0.0.11:53

defaults
  log global
  mode tcp
  option dontlognull
  # tune these as needed
  timeout connect 5000
  timeout client 50000
  timeout server 50000
  # allow to boot despite dns don't resolve backends
  default-server init-addr none

frontend control-plane
"""

_BACKEND_HEADER = """
backend kube-apiservers
  option httpchk GET /healthz
  # backends are not verified yet (!)
  """


@dataclass
class ConfigData:
    """Values supplied to the load balancer configuration."""

    control_plane_port: int
    backend_servers: dict[str, str] = field(default_factory=dict)
    ipv6: bool = False


def render_config(data: ConfigData) -> str:
    """Return the haproxy configuration for data.

    Backend servers are listed in order of their names.
    """
    port = data.control_plane_port
    frontend = f"  bind *:{port}\n  "
    if data.ipv6:
        frontend += f"bind :::{port};"
    frontend += "\n  default_backend kube-apiservers\n"

    family = "ipv6" if data.ipv6 else "ipv4"
    servers = "".join(
        f"\n  server {name} {address} check check-ssl verify none"
        f" resolvers docker resolve-prefer {family}"
        for name, address in sorted(data.backend_servers.items())
    )
    return _PREAMBLE + frontend + _BACKEND_HEADER + servers + "\n"