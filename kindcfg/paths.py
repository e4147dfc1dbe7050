"""Locating kubeconfig files the way kubectl does."""

from __future__ import annotations

import os
import posixpath
import stat
import sys
from collections.abc import Callable, Iterable

KUBECONFIG_ENV = "KUBECONFIG"

GetEnv = Callable[[str], "str | None"]


def _env(get_env: GetEnv, key: str) -> str:
    return get_env(key) or ""


def _current_goos() -> str:
    return "windows" if os.name == "nt" else sys.platform


def _slash_join(*parts: str) -> str:
    joined = "/".join(p for p in parts if p)
    return posixpath.normpath(joined) if joined else ""


def paths(explicit_path: str, get_env: GetEnv) -> list[str]:
    """Return the kubeconfig paths to consider.

    An explicit path wins; otherwise the $KUBECONFIG list (without empty
    entries and duplicates); otherwise $HOME/.kube/config.
    """
    if explicit_path:
        return [explicit_path]
    raw = _env(get_env, KUBECONFIG_ENV)
    found = discard_empty_and_duplicates(raw.split(os.pathsep) if raw else [])
    if found:
        return found
    return [_slash_join(home_dir(_current_goos(), get_env), ".kube", "config")]


def path_for_merge(explicit_path: str, get_env: GetEnv) -> str:
    """Return the file kubectl would merge into."""
    candidates = paths(explicit_path, get_env)
    if len(candidates) == 1:
        return candidates[0]
    for filename in candidates:
        if file_exists(filename):
            return filename
    return candidates[-1]


def file_exists(filename: str) -> bool:
    """Return True if filename exists and is not a directory."""
    try:
        info = os.stat(filename)
    except (FileNotFoundError, NotADirectoryError):
        return False
    return not stat.S_ISDIR(info.st_mode)


def discard_empty_and_duplicates(items: Iterable[str]) -> list[str]:
    """Return items without empty strings or repeats, keeping first order."""
    return list(dict.fromkeys(item for item in items if item))


def home_dir(goos: str, get_env: GetEnv) -> str:
    """Return the current user's home directory.

    On Windows, prefer a candidate holding .kube/config, then a writable
    directory, then an existing path, then any set value.
    """
    if goos != "windows":
        return _env(get_env, "HOME")

    home = _env(get_env, "HOME")
    home_drive, home_path = _env(get_env, "HOMEDRIVE"), _env(get_env, "HOMEPATH")
    drive_path = home_drive + home_path if home_drive and home_path else ""
    user_profile = _env(get_env, "USERPROFILE")

    for candidate in (home, drive_path, user_profile):
        if not candidate:
            continue
        try:
            os.stat(os.path.join(candidate, ".kube", "config"))
        except OSError:
            continue
        return candidate

    first_set = ""
    first_existing = ""
    for candidate in (home, user_profile, drive_path):
        if not candidate:
            continue
        if not first_set:
            first_set = candidate
        try:
            info = os.stat(candidate)
        except OSError:
            continue
        if not first_existing:
            first_existing = candidate
        if stat.S_ISDIR(info.st_mode) and info.st_mode & stat.S_IWUSR:
            return candidate

    return first_existing or first_set