"""
Filesystem primitives used by the sync writer.

Every failure is raised as SyncError carrying the path and the operation,
except "not found" on reads, which is reported as an absent ReadResult.
"""

import json
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from ..errors import SyncError
from ..utils import logger

PRIVATE_FILE_MODE = 0o600


@dataclass(frozen=True)
class ReadResult:
    """Outcome of reading a file that may not exist yet."""
    path: Path
    text: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.text is not None


def ensure_dir(path: Path) -> None:
    """Ensure directory exists."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise SyncError(path, "mkdir", e) from e


def read_text_if_exists(path: Path) -> ReadResult:
    try:
        return ReadResult(path, path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return ReadResult(path)
    except (OSError, UnicodeDecodeError) as e:
        raise SyncError(path, "read", e) from e


def read_json_if_exists(path: Path) -> Dict[str, Any]:
    """Parsed JSON object, or {} when the file is absent."""
    result = read_text_if_exists(path)
    if not result.found:
        return {}
    try:
        data = json.loads(result.text)
    except json.JSONDecodeError as e:
        raise SyncError(path, "parse", e) from e
    if not isinstance(data, dict):
        raise SyncError(path, "parse", ValueError("expected a JSON object"))
    return data


def write_text(path: Path, content: str, mode: Optional[int] = None) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        if mode is None:
            path.write_text(content, encoding="utf-8")
        else:
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(content)
            # O_CREAT only applies the mode to new files
            os.chmod(path, mode)
    except OSError as e:
        raise SyncError(path, "write", e) from e
    logger.debug("Wrote %s", path)


def write_json(path: Path, data: Dict[str, Any], mode: Optional[int] = PRIVATE_FILE_MODE) -> None:
    write_text(path, json.dumps(data, indent=2, ensure_ascii=False), mode=mode)


def backup_file(path: Path, timestamp: str) -> Optional[Path]:
    """Copy ``path`` to ``<name>.bak.<timestamp>``. Returns None if there was nothing to back up."""
    if not path.exists():
        return None
    backup_path = path.with_name(f"{path.name}.bak.{timestamp}")
    try:
        shutil.copy2(path, backup_path)
    except OSError as e:
        raise SyncError(backup_path, "backup", e) from e
    logger.info("Backed up %s to %s", path, backup_path)
    return backup_path


def _remove_entry(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def unlink_symlink(path: Path) -> bool:
    """Remove ``path`` if it is a symlink, leaving whatever it points at untouched."""
    if not path.is_symlink():
        return False
    try:
        path.unlink()
    except OSError as e:
        raise SyncError(path, "unlink", e) from e
    logger.debug("Removed link %s", path)
    return True


def force_symlink(source: Path, target: Path) -> bool:
    """
    Point ``target`` at ``source``, replacing whatever is there.
    Returns False when the link already pointed at ``source``.
    """
    try:
        if target.is_symlink() and Path(os.readlink(target)) == source:
            return False
        if os.path.lexists(target):
            _remove_entry(target)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.symlink_to(source, target_is_directory=True)
    except OSError as e:
        raise SyncError(target, "symlink", e) from e
    return True


def copy_dir(source: Path, target: Path) -> None:
    """Replace ``target`` with a copy of ``source``."""
    try:
        if os.path.lexists(target):
            _remove_entry(target)
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copytree(source, target)
    except OSError as e:
        raise SyncError(target, "copy", e) from e
