"""Default collection of registered test cases."""

from __future__ import annotations

import importlib.util
import sys
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from minitest.case import TestCase

TestCaseFactory = Callable[[], "TestCase"]

_REGISTRY: list[TestCaseFactory] = []


def register(factory: TestCaseFactory) -> TestCaseFactory:
    _REGISTRY.append(factory)
    return factory


def registered_tests() -> list[TestCaseFactory]:
    return list(_REGISTRY)


def clear() -> None:
    _REGISTRY.clear()


def load_test_module(path: str | Path) -> ModuleType:
    """Import a test file so the fixtures it declares get registered.

    The file's directory is added to ``sys.path`` so it can import sibling
    helper modules. Any error raised while running the module is reported
    as an ``ImportError``.
    """
    path = Path(path).resolve()
    if not path.is_file():
        raise ImportError(f"test module not found: {path}")
    module_name = f"minitest_tests.{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load {path}")

    module_dir = str(path.parent)
    if module_dir not in sys.path:
        sys.path.insert(0, module_dir)

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        sys.modules.pop(module_name, None)
        raise ImportError(f"Cannot load {path}: {e}") from e
    return module
