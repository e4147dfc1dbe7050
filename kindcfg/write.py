"""Writing kubeconfig files to disk."""

from __future__ import annotations

import os

from .encode import encode
from .types import Config


def write_config(cfg: Config, config_path: str) -> None:
    """Encode cfg and write it to config_path.

    Missing parent directories are created with mode 0755. The file itself
    is written with mode 0600.
    """
    encoded = encode(cfg)
    directory = os.path.dirname(config_path)
    if directory and not os.path.exists(directory):
        os.makedirs(directory, 0o755, exist_ok=True)
    fd = os.open(config_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as handle:
        handle.write(encoded)