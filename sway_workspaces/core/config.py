"""Runtime path resolution.

Resolved once at startup, before any file I/O, into concrete absolute paths.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

RUNTIME_DIR_FALLBACK = "/tmp"
DEFAULT_MAPPING_NAME = "ws.json"
DEFAULT_PREVIOUS_NAME = "ws-prev.json"


@dataclass(frozen=True)
class RuntimePaths:
    """Absolute locations of the state files.

    Attributes:
        runtime_dir: $XDG_RUNTIME_DIR (or /tmp)
        mapping_file: Output-to-workspace mapping (JSON object)
        previous_file: Previously focused workspace (JSON pair)
    """

    runtime_dir: Path
    mapping_file: Path
    previous_file: Path


def runtime_dir(env: Optional[Mapping[str, str]] = None) -> Path:
    env = os.environ if env is None else env
    return Path(env.get("XDG_RUNTIME_DIR") or RUNTIME_DIR_FALLBACK)


def _expand(raw: str, base: Path) -> Path:
    value = raw.replace("${XDG_RUNTIME_DIR}", str(base)).replace("$XDG_RUNTIME_DIR", str(base))
    return Path(value).expanduser().absolute()


def resolve_paths(
    mapping_file: Optional[str] = None,
    previous_file: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
) -> RuntimePaths:
    """Resolve state file locations.

    Args:
        mapping_file: User-supplied mapping path (may contain $XDG_RUNTIME_DIR or ~)
        previous_file: User-supplied previous-workspace path
        env: Environment to resolve against (default: os.environ)

    Returns:
        RuntimePaths with absolute paths

    Examples:
        >>> resolve_paths(env={"XDG_RUNTIME_DIR": "/run/user/1000"}).mapping_file
        PosixPath('/run/user/1000/ws.json')
    """
    base = runtime_dir(env)
    return RuntimePaths(
        runtime_dir=base,
        mapping_file=_expand(mapping_file, base) if mapping_file else base / DEFAULT_MAPPING_NAME,
        previous_file=_expand(previous_file, base) if previous_file else base / DEFAULT_PREVIOUS_NAME,
    )
