from __future__ import annotations

"""Local disk implementation of the :class:`FileSystem` protocol."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

__all__ = ["LocalFileSystem"]


class LocalFileSystem:
    """pathlib-backed file access; reads are raw bytes, writes are UTF-8 text."""

    def exists(self, path: Path) -> bool:
        return Path(path).exists()

    def read_bytes(self, path: Path) -> bytes:
        data = Path(path).read_bytes()
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("I/O: read path=%s bytes=%d", path, len(data))
        return data

    def write_text(self, path: Path, text: str) -> None:
        try:
            Path(path).write_text(text, encoding="utf-8")
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("I/O: wrote path=%s chars=%d", path, len(text))
        except OSError:
            logger.error("I/O FAIL: write path=%s", path, exc_info=True)
            raise

    def delete(self, path: Path) -> None:
        Path(path).unlink()
        logger.debug("I/O: deleted path=%s", path)

    def create_directory(self, path: Path) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)
