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


"""Determine the release type for a sequence of commits.

Key Concepts (ELI5)::

    ┌─────────────────────┬────────────────────────────────────────────────┐
    │ Concept             │ ELI5 Explanation                               │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ Custom rules        │ Your own rules. Checked first for every        │
    │                     │ commit.                                        │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ Default rules       │ Built-in rules (feat → minor, fix → patch,    │
    │                     │ breaking → major). Only used for a commit      │
    │                     │ when no custom rule matched it at all.        │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ Suppression         │ A rule with ``release = false``. It silences   │
    │                     │ that one commit; it never lowers what other   │
    │                     │ commits already decided.                      │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ Running maximum     │ The most severe release seen so far. Once it  │
    │                     │ is ``major`` nothing can raise it, so we stop.│
    └─────────────────────┴────────────────────────────────────────────────┘

Pipeline::

    commits ──► split squash merges ──► parse ──► drop reverted pairs
                                                       │
         ┌─────────────────────────────────────────────┘
         ▼
    custom rules ──(no match)──► default rules ──► fold into maximum

Usage::

    import asyncio
    from commit_analyzer import analyze_commits

    release = asyncio.run(analyze_commits(
        {'preset': 'angular'},
        [{'hash': '123', 'message': 'fix(scope1): First fix'},
         {'hash': '456', 'message': 'feat(scope2): Second feature'}],
    ))
    assert release == 'minor'
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping
from typing import Any, Protocol

from commit_analyzer.commit_parsing import (
    RELEASE_TYPES,
    UNSET,
    CommitParser,
    MatchResult,
    RawCommit,
    ReleaseType,
    StructuredCommit,
    is_higher,
)
from commit_analyzer.config import AnalyzerConfig
from commit_analyzer.logging import get_logger
from commit_analyzer.parser_config import load_parser
from commit_analyzer.revert import filter_reverted
from commit_analyzer.rules import DEFAULT_RELEASE_RULES, RuleSet, load_release_rules, match_rules
from commit_analyzer.squash import split_squash_commits

_logger = get_logger(__name__)

# How far a release is lowered during initial development.
_INITIAL_PHASE_SHIFT = 2


class AnalysisLogger(Protocol):
    """The logger an analysis reports to: printf-style ``info`` calls."""

    def info(self, msg: str, *args: Any) -> Any:  # noqa: ANN401
        """Log ``msg % args``."""
        ...


def initial_phase_release(release: MatchResult, initial_phase: bool = False) -> MatchResult:
    """Demote ``release`` while in initial development.

    ``major`` becomes ``minor``, ``premajor`` becomes ``preminor``,
    ``minor`` becomes ``patch`` and ``preminor`` becomes ``prepatch``;
    anything else is returned unchanged. Each move is two places down
    ``RELEASE_TYPES``.

    >>> initial_phase_release(ReleaseType.MAJOR, True)
    <ReleaseType.MINOR: 'minor'>
    >>> initial_phase_release(ReleaseType.PATCH, True)
    <ReleaseType.PATCH: 'patch'>
    """
    if not initial_phase or not isinstance(release, ReleaseType):
        return release
    index = RELEASE_TYPES.index(release)
    if index < len(RELEASE_TYPES) - _INITIAL_PHASE_SHIFT - 1:
        return RELEASE_TYPES[index + _INITIAL_PHASE_SHIFT]
    return release


def analyze_commit(
    commit: StructuredCommit,
    custom_rules: RuleSet | None,
    default_rules: RuleSet = DEFAULT_RELEASE_RULES,
) -> MatchResult:
    """Return the release decision for one commit.

    Custom rules are consulted first. Default rules are only consulted
    when no custom rule matched; a custom ``False`` or ``None`` is a
    decision and is returned as is.
    """
    result: MatchResult = UNSET
    if custom_rules is not None:
        result = match_rules(custom_rules, commit)
    if result is UNSET:
        result = match_rules(default_rules, commit)
    return result


def _parse_all(
    parser: CommitParser,
    commits: Iterable[RawCommit],
    log: AnalysisLogger,
) -> list[tuple[RawCommit, StructuredCommit]]:
    parsed: list[tuple[RawCommit, StructuredCommit]] = []
    for raw in commits:
        try:
            parsed.append((raw, parser.parse(raw.message, hash=raw.hash)))
        except ValueError as exc:
            log.info('Skipping commit %s: %s', raw.hash or '(no hash)', exc)
    return parsed


async def analyze_commits(
    config: AnalyzerConfig | Mapping[str, Any] | None,
    commits: Iterable[RawCommit | Mapping[str, Any] | str],
    logger: AnalysisLogger | None = None,
) -> ReleaseType | None:
    """Determine the release type for ``commits``.

    Args:
        config: Analyzer options, as an :class:`AnalyzerConfig` or mapping.
        commits: Commits in order, as :class:`RawCommit`, ``{'message',
            'hash'}`` mappings, or bare messages.
        logger: Receives one line per analyzed commit and a summary.
            Defaults to the package structlog logger.

    Returns:
        The most severe release type, or ``None`` if no commit calls for
        a release.

    Raises:
        AnalyzerError: For invalid configuration, unresolvable modules or
            an invalid grammar. Raised before any commit is analyzed.
    """
    if not isinstance(config, AnalyzerConfig):
        config = AnalyzerConfig.from_mapping(config)
    log: AnalysisLogger = logger or get_logger('commit_analyzer')

    custom_rules = await asyncio.to_thread(load_release_rules, config.release_rules, config.cwd)
    parser = await load_parser(config)

    raw_commits = split_squash_commits(RawCommit.coerce(commit) for commit in commits)
    parsed = _parse_all(parser, raw_commits, log)
    kept = {id(commit) for commit in filter_reverted([commit for _, commit in parsed])}

    release_type: ReleaseType | None = None
    for raw, commit in parsed:
        if id(commit) not in kept:
            _logger.debug('skipping reverted commit', hash=raw.hash, header=commit.get('header'))
            continue

        log.info('Analyzing commit: %s', raw.message)
        result = initial_phase_release(analyze_commit(commit, custom_rules), config.initial_phase)
        if isinstance(result, ReleaseType):
            log.info('The release type for the commit is %s', result.value)
            if is_higher(release_type, result):
                release_type = result
        else:
            log.info('The commit should not trigger a release')

        if release_type == RELEASE_TYPES[0]:
            break

    log.info(
        'Analysis of %s commits complete: %s release',
        len(raw_commits),
        release_type.value if release_type else 'no',
    )
    return release_type


__all__ = [
    'AnalysisLogger',
    'analyze_commit',
    'analyze_commits',
    'initial_phase_release',
]
