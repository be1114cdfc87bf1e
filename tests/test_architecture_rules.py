"""Architecture enforcement tests for the cluster_probe layering.

Repository-local invariants keeping the probe core decoupled from the outer
presentation layer. Only import boundaries are checked:

1) The core packages (``base``, ``admin``, ``config``, ``probe``,
   ``netperf``) must not import ``cluster_probe.service``; presenters are
   reached only through the ``ResultPresenter`` protocol.
2) ``cluster_probe.base`` must not import any sibling package.

The scan is static (``ast``) to avoid import-time side effects; relative
imports are resolved against the importing module's package.
"""

from __future__ import annotations

import ast
from pathlib import Path
from typing import Iterable, Iterator, List

import pytest

REPO_ROOT = Path(__file__).resolve().parent.parent
PACKAGE_ROOT = REPO_ROOT / "cluster_probe"

CORE_PACKAGES = ("base", "admin", "config", "probe", "netperf")
SIBLINGS_OF_BASE = ("admin", "config", "probe", "netperf", "service")


def _iter_python_files(root: Path) -> Iterable[Path]:
    """Yield all Python source files under ``root``, skipping caches."""
    for path in root.rglob("*.py"):
        if "__pycache__" in path.parts:
            continue
        yield path


def _module_package(path: Path) -> List[str]:
    rel = path.relative_to(REPO_ROOT).with_suffix("")
    return list(rel.parts[:-1])


def _imported_modules(path: Path) -> Iterator[str]:
    """Yield absolute dotted names imported by ``path``."""
    tree = ast.parse(path.read_text(encoding="utf-8", errors="replace"), filename=str(path))
    package = _module_package(path)
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield alias.name
        elif isinstance(node, ast.ImportFrom):
            if node.level:
                base = package[: len(package) - (node.level - 1)]
                prefix = ".".join(base)
                yield f"{prefix}.{node.module}" if node.module else prefix
            elif node.module:
                yield node.module


def _offenders(package: str, forbidden: Iterable[str]) -> List[str]:
    root = PACKAGE_ROOT / package
    if not root.is_dir():
        pytest.skip(f"{root} not present")
    banned = tuple(f"cluster_probe.{name}" for name in forbidden)
    found: List[str] = []
    for py in _iter_python_files(root):
        for module in _imported_modules(py):
            if module in banned or module.startswith(tuple(b + "." for b in banned)):
                found.append(f"{py.relative_to(REPO_ROOT)}: imports {module}")
    return found


@pytest.mark.parametrize("package", CORE_PACKAGES)
def test_core_does_not_import_presentation(package: str) -> None:
    offenders = _offenders(package, ["service"])
    if offenders:
        pytest.fail("Core packages must not import the service layer.\n" + "\n".join(offenders))


def test_base_does_not_import_siblings() -> None:
    offenders = _offenders("base", SIBLINGS_OF_BASE)
    if offenders:
        pytest.fail("cluster_probe.base must stay dependency-free.\n" + "\n".join(offenders))
