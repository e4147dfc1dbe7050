"""Lock files guarding kubeconfig edits, compatible with kubectl's scheme."""

from __future__ import annotations

import contextlib
import os
from collections.abc import Iterator


def lock_name(filename: str) -> str:
    """Return the lock file path for filename."""
    return filename + ".lock"


def lock_file(filename: str) -> None:
    """Create the lock file for filename; raise FileExistsError if held."""
    directory = os.path.dirname(filename) or "."
    if not os.path.exists(directory):
        os.makedirs(directory, 0o755, exist_ok=True)
    fd = os.open(lock_name(filename), os.O_CREAT | os.O_EXCL, 0)
    os.close(fd)


def unlock_file(filename: str) -> None:
    """Remove the lock file for filename."""
    os.remove(lock_name(filename))


@contextlib.contextmanager
def locked(filename: str) -> Iterator[None]:
    """Hold the lock for filename for the duration of the block."""
    lock_file(filename)
    try:
        yield
    finally:
        with contextlib.suppress(OSError):
            unlock_file(filename)