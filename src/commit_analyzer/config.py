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


"""Configuration for commit-analyzer.

Options come either from a mapping (the programmatic API) or from a
``commit-analyzer.toml`` file read with tomlkit. Keys may be spelled in
``snake_case`` or in the ``camelCase`` used by semantic-release plugin
configs (``releaseRules``, ``parserOpts``).

Supported keys::

    preset         = "conventionalcommits"   # embedded grammar preset
    config         = "my_org.commit_grammar" # module defining PARSER_OPTS
    initial_phase  = false                   # 0.x: major->minor, minor->patch
    release_rules  = "release-rules.toml"    # module or data file

    [parser_opts]                            # overrides for the grammar
    note_keywords = ["BREAKING CHANGE", "BREAKING"]

``release_rules`` may instead be an inline array of tables::

    [[release_rules]]
    type = "docs"
    scope = "README*"
    release = "patch"

Unknown keys are rejected with a "did you mean" hint.

Usage::

    from commit_analyzer.config import AnalyzerConfig, load_config

    cfg = AnalyzerConfig.from_mapping({'preset': 'eslint'})
    cfg = load_config(Path('commit-analyzer.toml'))
"""

from __future__ import annotations

import difflib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomlkit
import tomlkit.exceptions

from commit_analyzer.commit_parsing import normalize_key
from commit_analyzer.errors import E, AnalyzerError
from commit_analyzer.logging import get_logger

logger = get_logger(__name__)

# The config file name looked up in the working directory.
CONFIG_FILENAME = 'commit-analyzer.toml'

VALID_KEYS: frozenset[str] = frozenset({
    'config',
    'initial_phase',
    'parser_opts',
    'preset',
    'release_rules',
})

_TYPE_MAP: dict[str, type | tuple[type, ...]] = {
    'config': str,
    'initial_phase': bool,
    'parser_opts': Mapping,
    'preset': str,
}


@dataclass(frozen=True)
class AnalyzerConfig:
    """Validated options for one analysis run.

    Attributes:
        preset: Name of an embedded grammar preset (``angular``, ``eslint``...).
        config: Module reference whose ``PARSER_OPTS`` defines the grammar.
        parser_opts: Grammar overrides applied on top of the preset/config.
        release_rules: Custom rules, inline or as a module/file reference.
            Validated when loaded, not here.
        initial_phase: Demote major to minor and minor to patch (and the
            pre-release forms alike) for projects still in initial
            development (``0.x``).
        cwd: Directory used to resolve relative module references.
        config_path: The file this config was read from, if any.
    """

    preset: str | None = None
    config: str | None = None
    parser_opts: Mapping[str, Any] | None = None
    release_rules: Any = None
    initial_phase: bool = False
    cwd: Path = field(default_factory=Path.cwd)
    config_path: Path | None = None

    @classmethod
    def from_mapping(
        cls,
        options: Mapping[str, Any] | None,
        *,
        cwd: Path | None = None,
        config_path: Path | None = None,
    ) -> AnalyzerConfig:
        """Validate ``options`` and build a config.

        Raises:
            AnalyzerError: ``CA-CONFIG-INVALID-KEY`` for unknown keys,
                ``CA-CONFIG-INVALID`` for values of the wrong type.
        """
        source = str(config_path) if config_path else 'the analyzer options'
        kwargs: dict[str, Any] = {}
        for raw_key, value in (options or {}).items():
            key = normalize_key(raw_key)
            if key not in VALID_KEYS:
                raise AnalyzerError(
                    code=E.CONFIG_INVALID_KEY,
                    message=f"Unknown key '{raw_key}' in {source}",
                    hint=_key_hint(key),
                )
            _validate_value_type(key, value, source)
            kwargs[key] = value
        return cls(**kwargs, cwd=cwd or Path.cwd(), config_path=config_path)


def _key_hint(key: str) -> str:
    suggestion = difflib.get_close_matches(key, VALID_KEYS, n=1, cutoff=0.6)
    if suggestion:
        return f"Did you mean '{suggestion[0]}'?"
    return f'Valid keys are: {", ".join(sorted(VALID_KEYS))}.'


def _validate_value_type(key: str, value: Any, source: str) -> None:  # noqa: ANN401
    """Raise if a config value has the wrong type. ``None`` means unset."""
    expected = _TYPE_MAP.get(key)
    if expected is None or value is None:
        return
    if not isinstance(value, expected):
        type_name = expected.__name__ if isinstance(expected, type) else str(expected)
        raise AnalyzerError(
            code=E.CONFIG_INVALID,
            message=f"'{key}' must be {type_name}, got {type(value).__name__}",
            hint=f'Check the value of {key} in {source}.',
        )


def load_config(path: Path | None = None, *, cwd: Path | None = None) -> AnalyzerConfig:
    """Load and validate ``commit-analyzer.toml``.

    Args:
        path: Explicit config file. When omitted, ``commit-analyzer.toml``
            in ``cwd`` is used if it exists, otherwise defaults apply.
        cwd: Working directory for relative references.

    Returns:
        A validated :class:`AnalyzerConfig`.

    Raises:
        AnalyzerError: ``CA-CONFIG-NOT-FOUND`` if an explicit ``path`` is
            missing or unreadable, or a validation error.
    """
    root = cwd or Path.cwd()
    config_path = path or root / CONFIG_FILENAME

    if not config_path.is_file():
        if path is not None:
            raise AnalyzerError(
                code=E.CONFIG_NOT_FOUND,
                message=f'Config file {config_path} does not exist',
                hint='Check the path, or omit it to use the defaults.',
            )
        logger.debug('no_commit_analyzer_config', path=str(config_path))
        return AnalyzerConfig(cwd=root)

    try:
        text = config_path.read_text(encoding='utf-8')
    except OSError as exc:
        raise AnalyzerError(
            code=E.CONFIG_NOT_FOUND,
            message=f'Failed to read {config_path}: {exc}',
        ) from exc

    try:
        doc = tomlkit.parse(text)
    except tomlkit.exceptions.TOMLKitError as exc:
        raise AnalyzerError(
            code=E.CONFIG_INVALID,
            message=f'Failed to parse {config_path}: {exc}',
        ) from exc

    return AnalyzerConfig.from_mapping(doc.unwrap(), cwd=root, config_path=config_path)


__all__ = [
    'CONFIG_FILENAME',
    'AnalyzerConfig',
    'load_config',
]
