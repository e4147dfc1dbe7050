"""Unpacking tar streams of node directories onto the host."""

from __future__ import annotations

import logging
import os
import tarfile
from typing import IO

_log = logging.getLogger(__name__)

_CHUNK = 64 * 1024


def _entry_path(directory: str, name: str) -> str:
    return os.path.normpath(os.path.join(directory, *name.split("/")))


def _write_member(source: IO[bytes], target: str, mode: int, size: int) -> None:
    fd = os.open(target, os.O_CREAT | os.O_RDWR, mode)
    written = 0
    try:
        with os.fdopen(fd, "r+b") as handle:
            while chunk := source.read(_CHUNK):
                handle.write(chunk)
                written += len(chunk)
    except OSError as exc:
        raise OSError(f"error writing to {target}: {exc}") from exc
    if written != size:
        raise OSError(f"only wrote {written} bytes to {target}; expected {size}")


def untar(
    stream: IO[bytes], directory: str, logger: logging.Logger | None = None
) -> None:
    """Unpack the tar archive read from stream into directory.

    Regular files and directories are written; other entries are skipped
    with a warning. The stream is drained to its end afterwards. Raises
    ValueError for a malformed archive and OSError when writing fails.
    """
    log = logger if logger is not None else _log
    try:
        with tarfile.open(fileobj=stream, mode="r|") as archive:
            for member in archive:
                target = _entry_path(directory, member.name)
                if member.isreg():
                    source = archive.extractfile(member)
                    if source is None:
                        raise ValueError(f"cannot read tar entry {member.name}")
                    _write_member(source, target, member.mode, member.size)
                elif member.isdir():
                    if not os.path.exists(target):
                        os.makedirs(target, 0o755, exist_ok=True)
                else:
                    log.warning(
                        "tar file entry %s contained unsupported file type %r",
                        member.name,
                        member.type,
                    )
    except tarfile.ReadError as exc:
        if str(exc) != "empty file":
            raise ValueError(f"tar reading error: {exc}") from exc
    except tarfile.TarError as exc:
        raise ValueError(f"tar reading error: {exc}") from exc

    # trailing padding may remain; consume it so the writer is not left waiting
    while stream.read(_CHUNK):
        pass