"""Source text loading for one build session."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class MissingModuleError(FileNotFoundError):
    """Raised when a resolved module path does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"{path} does not exist")
        self.path = path


class UnreadableModuleError(ValueError):
    """Raised when a module source is not valid UTF-8 text."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path} is not valid UTF-8: {reason}")
        self.path = path


class SourceCache:
    """Reads each module source once per session."""

    def __init__(self) -> None:
        self._texts: dict[str, str] = {}

    def read(self, path: str) -> str:
        if path not in self._texts:
            file_path = Path(path)
            if not file_path.is_file():
                raise MissingModuleError(path)
            logger.debug("open %s", path)
            try:
                self._texts[path] = file_path.read_text(encoding="utf-8")
            except UnicodeDecodeError as exc:
                raise UnreadableModuleError(path, exc.reason) from exc
        return self._texts[path]

    def __len__(self) -> int:
        return len(self._texts)


__all__ = ["MissingModuleError", "SourceCache", "UnreadableModuleError"]
