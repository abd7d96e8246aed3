# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0


"""Resolve named references to Python modules or data files.

Presets, grammar configs and release rules can all be given by name.
A name is resolved in two steps:

1. As an importable module (``my_org.release_rules``), so anything
   installed alongside commit-analyzer is found first.
2. As a path relative to the caller's working directory
   (``./config/rules``, ``rules.py``, ``rules.toml``, ``rules.json``).

If neither works, :class:`~commit_analyzer.errors.AnalyzerError` with
``CA-MODULE-NOT-FOUND`` is raised, chained to the original import error.
"""

from __future__ import annotations

import importlib
import importlib.util
import json
from pathlib import Path
from types import ModuleType
from typing import Any

import tomlkit
import tomlkit.exceptions

from commit_analyzer.errors import E, AnalyzerError
from commit_analyzer.logging import get_logger

logger = get_logger(__name__)

# File suffixes read as data rather than imported.
DATA_SUFFIXES: frozenset[str] = frozenset({'.json', '.toml'})


def _candidates(reference: str, cwd: Path) -> list[Path]:
    """Return the file paths ``reference`` may point to, in lookup order."""
    base = cwd / reference
    paths = [base]
    if base.suffix not in DATA_SUFFIXES | {'.py'}:
        paths.extend([base.with_name(base.name + '.py'), base / '__init__.py'])
    return paths


def _import_path(reference: str, path: Path) -> ModuleType:
    name = f'_commit_analyzer_ext_{abs(hash(str(path)))}'
    spec = importlib.util.spec_from_file_location(name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f'Cannot load {reference!r} from {path}')
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _read_data(path: Path) -> Any:  # noqa: ANN401
    text = path.read_text(encoding='utf-8')
    try:
        if path.suffix == '.json':
            return json.loads(text)
        return tomlkit.parse(text).unwrap()
    except (json.JSONDecodeError, tomlkit.exceptions.ParseError) as exc:
        raise AnalyzerError(
            code=E.CONFIG_INVALID,
            message=f'Cannot parse {path}: {exc}',
            hint='Check the file syntax.',
        ) from exc


def import_module(reference: str, cwd: Path | None = None) -> ModuleType:
    """Import ``reference`` by module name, then by path relative to ``cwd``.

    Args:
        reference: A dotted module name or a relative path.
        cwd: Directory for relative lookups (defaults to the process cwd).

    Returns:
        The imported module.

    Raises:
        AnalyzerError: ``CA-MODULE-NOT-FOUND`` if the module cannot be found.
    """
    root = cwd or Path.cwd()
    cause: Exception | None = None
    try:
        return importlib.import_module(reference)
    except (ModuleNotFoundError, TypeError, ValueError) as exc:
        # TypeError/ValueError: relative or empty names like './rules'.
        cause = exc

    for path in _candidates(reference, root):
        if path.is_file() and path.suffix == '.py':
            logger.debug('loading module from path', reference=reference, path=str(path))
            return _import_path(reference, path)

    raise AnalyzerError(
        code=E.MODULE_NOT_FOUND,
        message=f'Cannot find module "{reference}" or "{root / reference}".',
        hint='Use an importable module name, or a path relative to the working directory.',
    ) from cause


def load_reference(reference: str, cwd: Path | None = None) -> ModuleType | Any:  # noqa: ANN401
    """Resolve ``reference`` to a module, or to parsed data for ``.toml``/``.json`` files."""
    root = cwd or Path.cwd()
    path = root / reference
    if path.suffix in DATA_SUFFIXES:
        if not path.is_file():
            raise AnalyzerError(
                code=E.MODULE_NOT_FOUND,
                message=f'Cannot find file "{path}".',
                hint='Data files are resolved relative to the working directory.',
            )
        logger.debug('loading data file', reference=reference, path=str(path))
        return _read_data(path)
    return import_module(reference, root)


__all__ = [
    'import_module',
    'load_reference',
]
