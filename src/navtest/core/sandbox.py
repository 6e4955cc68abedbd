"""Isolated execution of suite files."""
from __future__ import annotations

import importlib.util
import sys
from pathlib import Path
from types import ModuleType
from typing import Any

SUITE_HANDLE = "driver"


def execute_suite(source: str, driver: Any) -> ModuleType:
    """Run the script at ``source`` as a fresh module.

    The module is visible in ``sys.modules`` only while its body executes, so
    code that looks up its own module (dataclasses, ``typing.get_type_hints``)
    works; the only binding it receives from navtest is the ``driver`` handle.
    """

    path = Path(source).expanduser().resolve()
    module_name = f"navtest_suite_{path.stem}_{hash(str(path)) & 0xFFFF:x}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Unable to load suite from {path}")
    module = importlib.util.module_from_spec(spec)
    setattr(module, SUITE_HANDLE, driver)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    finally:
        sys.modules.pop(module_name, None)
    return module
