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


"""Load the commit grammar for an analysis run.

Resolution order:

1. ``preset``: an embedded preset, else an installed module named
   ``conventional_changelog_<preset>``.
2. ``config``: a module reference (import path, then a path relative to
   the working directory).
3. Neither, and no ``parser_opts``: the Angular preset.

``parser_opts`` is then merged on top. A grammar module defines either a
``PARSER_OPTS`` mapping or a ``parser_opts()`` factory, which may be a
coroutine function.

Imports run in a worker thread, so loading is the single awaited setup
step of an analysis and never interleaves with commit matching.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Mapping
from pathlib import Path
from types import ModuleType
from typing import Any

from commit_analyzer.commit_parsing import GrammarCommitParser, ParserOptions, merge_options
from commit_analyzer.config import AnalyzerConfig
from commit_analyzer.errors import E, AnalyzerError
from commit_analyzer.loader import import_module
from commit_analyzer.logging import get_logger
from commit_analyzer.presets import DEFAULT_PRESET, PRESETS, get_preset

logger = get_logger(__name__)

# Prefix of installable preset modules, after the npm package convention.
PRESET_MODULE_PREFIX = 'conventional_changelog_'


async def options_from_module(module: ModuleType, reference: str) -> Mapping[str, Any]:
    """Read grammar options from a ``PARSER_OPTS`` mapping or ``parser_opts()`` factory.

    Raises:
        AnalyzerError: ``CA-CONFIG-INVALID`` if the module defines neither.
    """
    options = getattr(module, 'PARSER_OPTS', None)
    if options is None:
        factory = getattr(module, 'parser_opts', None)
        if callable(factory):
            options = factory()
            if inspect.isawaitable(options):
                options = await options
    if not isinstance(options, Mapping):
        raise AnalyzerError(
            code=E.CONFIG_INVALID,
            message=f'Module "{reference}" does not define a PARSER_OPTS mapping or a parser_opts() factory',
            hint='Define PARSER_OPTS = {"header_pattern": ..., "header_correspondence": [...]}.',
        )
    return options


async def _load_module_options(reference: str, cwd: Path, label: str) -> Mapping[str, Any]:
    try:
        module = await asyncio.to_thread(import_module, reference, cwd)
    except AnalyzerError as exc:
        if exc.code != E.MODULE_NOT_FOUND:
            raise
        raise AnalyzerError(
            code=E.MODULE_NOT_FOUND,
            message=f'{label} does not exist: {exc.info.message}',
            hint=exc.hint,
        ) from (exc.__cause__ or exc)
    return await options_from_module(module, reference)


async def load_parser_options(config: AnalyzerConfig) -> ParserOptions:
    """Resolve the grammar options for ``config``.

    Raises:
        AnalyzerError: ``CA-MODULE-NOT-FOUND`` for an unknown preset or
            config module, ``CA-CONFIG-INVALID`` for a module without
            options.
    """
    loaded: Mapping[str, Any] = {}
    if config.preset:
        embedded = get_preset(config.preset)
        if embedded is not None:
            loaded = embedded
        else:
            loaded = await _load_module_options(
                PRESET_MODULE_PREFIX + config.preset.lower(),
                config.cwd,
                f'Preset: "{config.preset}"',
            )
    elif config.config:
        loaded = await _load_module_options(config.config, config.cwd, f'Config: "{config.config}"')
    elif not config.parser_opts:
        loaded = PRESETS[DEFAULT_PRESET]

    logger.debug('loaded parser options', preset=config.preset, config=config.config)
    return ParserOptions.from_mapping(merge_options(loaded, config.parser_opts))


async def load_parser(config: AnalyzerConfig) -> GrammarCommitParser:
    """Load the grammar for ``config`` and compile it into a parser.

    Raises:
        AnalyzerError: As :func:`load_parser_options`, plus
            ``CA-PARSER-CONFIG-INVALID`` if a pattern does not compile.
    """
    return GrammarCommitParser(await load_parser_options(config))


__all__ = [
    'load_parser',
    'load_parser_options',
    'options_from_module',
]
