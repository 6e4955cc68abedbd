"""Thin filesystem facade used by discovery and reporting."""
from __future__ import annotations

import os
from pathlib import Path
from typing import List


class LocalFileSystem:
    """Local disk access.

    ``list_dir`` returns names sorted so discovery order is stable across
    platforms.
    """

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def is_file(self, path: str) -> bool:
        return os.path.isfile(path)

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def list_dir(self, path: str) -> List[str]:
        return sorted(os.listdir(path))

    def join(self, *parts: str) -> str:
        return os.path.join(*parts)

    def absolute(self, path: str) -> str:
        return os.path.abspath(path)

    def write_text(self, path: str, text: str) -> None:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
