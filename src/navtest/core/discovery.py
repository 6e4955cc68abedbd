"""Suite discovery: turns user-supplied paths into runnable script files."""
from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from navtest.utils.filesystem import LocalFileSystem

logger = logging.getLogger(__name__)

SCRIPT_EXTENSIONS = (".py",)


def is_script_file(path: str) -> bool:
    return path.lower().endswith(SCRIPT_EXTENSIONS)


def find_test_files(directory: str, filesystem: Optional[LocalFileSystem] = None) -> List[str]:
    """Recursively collect script files under ``directory``, depth first."""

    fs = filesystem or LocalFileSystem()
    if not fs.is_dir(directory):
        return []
    found: List[str] = []
    for entry in fs.list_dir(directory):
        if entry in (".", ".."):
            continue
        path = fs.absolute(fs.join(directory, entry))
        if fs.is_dir(path):
            found.extend(find_test_files(path, fs))
        elif is_script_file(path):
            found.append(path)
    return found


def resolve(
    paths: Sequence[str],
    *,
    filesystem: Optional[LocalFileSystem] = None,
    on_missing: Optional[Callable[[str], None]] = None,
) -> List[str]:
    """Flatten ``paths`` into an ordered list of files to run.

    Directories are expanded in place; files are kept as given, in argument
    order. Missing paths are reported through ``on_missing`` and skipped.
    """

    fs = filesystem or LocalFileSystem()
    files: List[str] = []
    for path in paths:
        if not fs.exists(path):
            logger.warning("Path %s doesn't exist", path)
            if on_missing:
                on_missing(path)
            continue
        if fs.is_dir(path):
            discovered = find_test_files(path, fs)
            logger.debug("Discovered %d file(s) under %s", len(discovered), path)
            files.extend(discovered)
        elif fs.is_file(path):
            files.append(path)
    return files
