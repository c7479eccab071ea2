from __future__ import annotations

import base64
import logging
import shutil
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from ...errors import NotFoundError
from ...utils import isoformat

logger = logging.getLogger(__name__)


TEXT_ENCODINGS = ("utf8", "utf-8")
ENCODINGS = TEXT_ENCODINGS + ("base64",)


class FileWorkspace:
    """
    Sandboxed filesystem access for the file agent.

    Every path is resolved against `working_directory` (symlinks
    followed) and must land inside one of `allowed_roots`; anything
    else raises PermissionError. Missing targets raise NotFoundError.

    Parameters
    ----------
    allowed_roots:
        Directories the agent may touch. The roots themselves cannot
        be deleted.
    working_directory:
        Base for relative paths. Defaults to the first root.
    max_file_size:
        Upper bound in bytes for reads and writes.
    """

    def __init__(
        self,
        allowed_roots: Sequence[str],
        working_directory: Optional[str] = None,
        max_file_size: int = 10 * 1024 * 1024,
    ) -> None:
        if not allowed_roots:
            raise ValueError("At least one allowed root is required")

        self.roots: List[Path] = [Path(r).resolve() for r in allowed_roots]
        self.working_directory = (
            Path(working_directory).resolve() if working_directory else self.roots[0]
        )
        self.max_file_size = max_file_size

    # ------------------------------------------------------------------
    # Path Resolution
    # ------------------------------------------------------------------

    def resolve(self, path: str) -> Path:
        if not path:
            raise ValueError("Path is required")

        candidate = Path(path)
        if not candidate.is_absolute():
            candidate = self.working_directory / candidate
        resolved = candidate.resolve()

        for root in self.roots:
            if resolved == root or root in resolved.parents:
                return resolved

        raise PermissionError(f"Access denied: path outside allowed directories: {path}")

    def _existing(self, path: str) -> Path:
        resolved = self.resolve(path)
        if not resolved.exists():
            raise NotFoundError(f"Path not found: {path}")
        return resolved

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def read(self, path: str, encoding: str = "utf8") -> Dict[str, Any]:
        _check_encoding(encoding)
        resolved = self._existing(path)

        if not resolved.is_file():
            raise ValueError(f"Path is not a file: {path}")

        stat = resolved.stat()
        if stat.st_size > self.max_file_size:
            raise ValueError(
                f"File too large: {stat.st_size} bytes (max: {self.max_file_size})"
            )

        raw = resolved.read_bytes()
        if encoding == "base64":
            content = base64.b64encode(raw).decode("ascii")
        else:
            content = raw.decode("utf-8")

        logger.info("[FILE WORKSPACE] Read %s (%d bytes)", resolved, stat.st_size)

        return {
            "path": path,
            "content": content,
            "size": stat.st_size,
            "encoding": encoding,
            "lastModified": isoformat(stat.st_mtime),
        }

    def write(
        self,
        path: str,
        content: str,
        encoding: str = "utf8",
        create_directories: bool = False,
    ) -> Dict[str, Any]:
        _check_encoding(encoding)
        resolved = self.resolve(path)

        if resolved.is_dir():
            raise ValueError(f"Path is a directory: {path}")

        if encoding == "base64":
            data = base64.b64decode(content, validate=True)
        else:
            data = content.encode("utf-8")

        if len(data) > self.max_file_size:
            raise ValueError(
                f"Content too large: {len(data)} bytes (max: {self.max_file_size})"
            )

        parent = resolved.parent
        if not parent.exists():
            if not create_directories:
                raise NotFoundError(f"Parent directory not found: {parent}")
            parent.mkdir(parents=True, exist_ok=True)

        created = not resolved.exists()
        resolved.write_bytes(data)
        stat = resolved.stat()

        logger.info("[FILE WORKSPACE] Wrote %s (%d bytes)", resolved, stat.st_size)

        return {
            "path": path,
            "size": stat.st_size,
            "encoding": encoding,
            "created": created,
            "lastModified": isoformat(stat.st_mtime),
        }

    def list(
        self,
        path: str,
        recursive: bool = False,
        include_hidden: bool = False,
    ) -> Dict[str, Any]:
        resolved = self._existing(path)

        if not resolved.is_dir():
            raise ValueError(f"Path is not a directory: {path}")

        items = self._scan(resolved, resolved, recursive, include_hidden)

        return {
            "path": path,
            "items": items,
            "count": len(items),
            "recursive": recursive,
            "includeHidden": include_hidden,
        }

    def _scan(
        self,
        base: Path,
        directory: Path,
        recursive: bool,
        include_hidden: bool,
    ) -> List[Dict[str, Any]]:
        items = []

        for entry in sorted(directory.iterdir(), key=lambda p: p.name):
            if not include_hidden and entry.name.startswith("."):
                continue

            try:
                stat = entry.stat()
            except OSError:
                logger.warning("[FILE WORKSPACE] Skipping inaccessible item: %s", entry)
                continue

            is_dir = entry.is_dir()
            items.append(
                {
                    "name": entry.name,
                    "path": entry.relative_to(base).as_posix(),
                    "type": "directory" if is_dir else "file",
                    "size": stat.st_size,
                    "lastModified": isoformat(stat.st_mtime),
                }
            )

            # Symlinked directories are listed but not descended into
            if recursive and is_dir and not entry.is_symlink():
                items.extend(self._scan(base, entry, recursive, include_hidden))

        return items

    def mkdir(self, path: str, recursive: bool = False) -> Dict[str, Any]:
        resolved = self.resolve(path)

        if resolved.exists() and not resolved.is_dir():
            raise ValueError(f"Path exists and is not a directory: {path}")

        if not recursive and not resolved.parent.exists():
            raise NotFoundError(f"Parent directory not found: {resolved.parent}")

        created = not resolved.exists()
        resolved.mkdir(parents=recursive, exist_ok=True)

        logger.info("[FILE WORKSPACE] Created directory %s", resolved)

        return {"path": path, "created": created, "recursive": recursive}

    def delete(self, path: str, recursive: bool = False) -> Dict[str, Any]:
        resolved = self._existing(path)

        if resolved in self.roots:
            raise PermissionError(f"Refusing to delete an allowed root: {path}")

        if resolved.is_dir():
            if any(resolved.iterdir()) and not recursive:
                raise ValueError(
                    "Directory is not empty. Use recursive=true to delete "
                    "non-empty directories."
                )
            kind = "directory"
            shutil.rmtree(resolved)
        else:
            kind = "file"
            resolved.unlink()

        logger.info("[FILE WORKSPACE] Deleted %s (%s)", resolved, kind)

        return {"path": path, "type": kind, "deleted": True, "recursive": recursive}


def _check_encoding(encoding: str) -> None:
    if encoding not in ENCODINGS:
        raise ValueError(f"Unsupported encoding: {encoding}")
