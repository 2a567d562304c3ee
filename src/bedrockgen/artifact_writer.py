"""Idempotent artifact writer.

Every generated file goes through write_if_absent():

    1. Resolve the absolute target path from a directory and a fixed filename
    2. If a regular file already exists there, warn and return without writing
    3. Otherwise render the content, write it as UTF-8 and report the path

Existing files are never overwritten, so running a generator twice against
the same directory is a no-op after the first run.

Limitations:
- Filesystem errors (permission denied, disk full) propagate unchanged
- No locking: two concurrent callers targeting the same path race on the
  existence check and the last writer wins
- A failed write can leave a partially written file behind
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of a single generation call."""

    path: Path
    written: bool
    message: str = ""

    @property
    def skipped(self) -> bool:
        """True when an existing file was left untouched."""
        return not self.written


def resolve_target(target_directory: str | Path, filename: str) -> Path:
    """Absolute path of filename inside target_directory."""
    return Path(target_directory).expanduser().resolve() / filename


def write_if_absent(
    target_directory: str | Path,
    filename: str,
    render: Callable[[], str],
    *,
    log: logging.Logger | None = None,
) -> GenerationResult:
    """Write rendered content to target_directory/filename unless it exists.

    Args:
        target_directory: Directory to write into (relative paths are resolved)
        filename: Fixed artifact filename
        render: Zero-argument callable producing the file content; only called
            when the file is absent
        log: Logger receiving the skip warning and write notice

    Returns:
        GenerationResult describing whether the file was written

    Raises:
        OSError: If checking, rendering or writing the file fails
    """
    log = log or logger
    target_path = resolve_target(target_directory, filename)

    if target_path.is_file():
        message = f"Existing {filename} found at {target_path}, skipping generation."
        log.warning(message)
        return GenerationResult(path=target_path, written=False, message=message)

    content = render()

    message = f"Writing {filename} file to {target_path}"
    log.info(message)
    target_path.write_text(content, encoding="utf-8")

    return GenerationResult(path=target_path, written=True, message=message)


__all__ = ["GenerationResult", "resolve_target", "write_if_absent"]
