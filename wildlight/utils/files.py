from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

__all__ = ["read_json", "safe_remove", "safe_rename", "write_json"]


def safe_remove(path: Path) -> None:
    """Safely remove a file from disk.

    Directories are not removed; missing files are silently ignored after a debug log.
    """

    target = Path(path)
    if target.is_dir():
        message = f"safe_remove refuses to delete directories: {target}"
        logger.error(message)
        raise IsADirectoryError(message)

    try:
        target.unlink()
    except FileNotFoundError:
        logger.debug("safe_remove skipped missing file: %s", target)
    except OSError as exc:  # pragma: no cover - exercised in failure cases
        message = f"Unable to remove {target}: {exc}"
        logger.error(message)
        raise OSError(message) from exc
    else:
        logger.debug("Removed file: %s", target)


def safe_rename(src: Path, dest: Path) -> None:
    """Rename *src* to *dest*, replacing *dest* if it exists."""

    origin = Path(src)
    target = Path(dest)

    if not origin.exists():
        message = f"Source path does not exist: {origin}"
        logger.error(message)
        raise FileNotFoundError(message)

    if not target.parent.exists():
        message = f"Destination directory does not exist: {target.parent}"
        logger.error(message)
        raise FileNotFoundError(message)

    try:
        origin.replace(target)
    except OSError as exc:  # pragma: no cover - exercised in failure cases
        message = f"Unable to rename {origin} -> {target}: {exc}"
        logger.error(message)
        raise OSError(message) from exc
    else:
        logger.debug("Renamed %s -> %s", origin, target)


def read_json(path: Path, fallback: Any, *, strict: bool = False) -> Any:
    """Load a JSON document, returning *fallback* when it is missing or malformed.

    With *strict*, only a missing file yields *fallback*; unreadable or
    malformed documents raise ``OSError`` / ``json.JSONDecodeError``.
    """

    target = Path(path)
    try:
        raw = target.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("JSON document missing, using fallback: %s", target)
        return fallback
    except OSError as exc:
        if strict:
            logger.error("Unable to read %s: %s", target, exc)
            raise
        logger.warning("Unable to read %s, using fallback: %s", target, exc)
        return fallback

    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        if strict:
            logger.error("Malformed JSON in %s: %s", target, exc)
            raise
        logger.warning("Malformed JSON in %s, using fallback: %s", target, exc)
        return fallback


def write_json(path: Path, value: Any) -> None:
    """Write *value* as indented JSON, swapping the file into place atomically.

    Readers never observe a half-written document: the payload goes to a
    sibling temp file which then replaces *path*.
    """

    target = Path(path)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            json.dump(value, handle, indent=2, ensure_ascii=False)
        safe_rename(tmp_path, target)
    except Exception:
        safe_remove(tmp_path)
        raise
