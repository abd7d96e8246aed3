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


"""Pure types for commit analysis.

This module has **zero** runtime dependencies beyond the standard library.
Everything here is a frozen dataclass, enum, read-only mapping or protocol.
Nothing here does I/O or logging.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, Union, runtime_checkable


class ReleaseType(str, Enum):
    """Semver release types, ordered by severity (highest first).

    Members are ``str`` subclasses, so ``ReleaseType.MINOR == 'minor'``
    holds and values serialize as plain strings.
    """

    MAJOR = 'major'
    PREMAJOR = 'premajor'
    MINOR = 'minor'
    PREMINOR = 'preminor'
    PATCH = 'patch'
    PREPATCH = 'prepatch'
    PRERELEASE = 'prerelease'

    def __str__(self) -> str:
        return self.value


# Release precedence: lower index = higher severity.
RELEASE_TYPES: list[ReleaseType] = [
    ReleaseType.MAJOR,
    ReleaseType.PREMAJOR,
    ReleaseType.MINOR,
    ReleaseType.PREMINOR,
    ReleaseType.PATCH,
    ReleaseType.PREPATCH,
    ReleaseType.PRERELEASE,
]


class _Unset(Enum):
    UNSET = 'unset'

    def __repr__(self) -> str:
        return 'UNSET'


# Marker for "no rule matched". Distinct from ``None`` (a rule that
# explicitly says "no release") and ``False`` (an explicit suppression).
UNSET = _Unset.UNSET

# What a rule can resolve to: a release type, ``False`` or ``None``.
ReleaseValue = Union[ReleaseType, bool, None]
MatchResult = Union[ReleaseType, bool, None, _Unset]


def _rank(value: MatchResult) -> int:
    """Return the severity rank of ``value`` (0 is the most severe).

    Order: named types (canonical order) > ``False`` > ``None`` > unset.
    """
    if value is UNSET:
        return len(RELEASE_TYPES) + 2
    if value is None:
        return len(RELEASE_TYPES) + 1
    if value is False:
        return len(RELEASE_TYPES)
    return RELEASE_TYPES.index(ReleaseType(value))


def is_higher(current: MatchResult, candidate: MatchResult) -> bool:
    """Return True when ``candidate`` should replace ``current`` as the best.

    >>> is_higher(ReleaseType.PATCH, ReleaseType.MINOR)
    True
    >>> is_higher(ReleaseType.MAJOR, ReleaseType.MAJOR)
    False
    >>> is_higher(UNSET, False)
    True
    >>> is_higher(ReleaseType.PATCH, False)
    False
    """
    return _rank(candidate) < _rank(current)


def highest(values: Iterable[MatchResult]) -> MatchResult:
    """Fold ``values`` into the single most severe one (``UNSET`` if empty)."""
    best: MatchResult = UNSET
    for value in values:
        if is_higher(best, value):
            best = value
    return best


@dataclass(frozen=True)
class RawCommit:
    """A commit message as supplied by the caller.

    Attributes:
        message: The full commit message.
        hash: The commit SHA, when known.
        squash: Whether this commit was split out of a squash merge.
    """

    message: str
    hash: str = ''
    squash: bool = False

    @classmethod
    def coerce(cls, value: RawCommit | Mapping[str, Any] | str) -> RawCommit:
        """Build a :class:`RawCommit` from a commit, a mapping or a bare message."""
        if isinstance(value, RawCommit):
            return value
        if isinstance(value, str):
            return cls(message=value)
        return cls(
            message=value.get('message') or '',
            hash=value.get('hash') or '',
            squash=bool(value.get('squash', False)),
        )


class StructuredCommit(Mapping[str, Any]):
    """A parsed commit message: a read-only mapping of named fields.

    Field names depend on the grammar (``type``/``scope``/``subject`` for
    Angular, ``tag``/``message`` for ESLint, ...), so any name is allowed.
    Looking up a field the grammar did not produce raises ``KeyError``;
    use :meth:`get` for optional fields.
    """

    def __init__(self, fields: Mapping[str, Any], hash: str = '') -> None:
        self._fields = dict(fields)
        self.hash = hash

    def __getitem__(self, key: str) -> Any:  # noqa: ANN401
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f'StructuredCommit({self._fields!r}, hash={self.hash!r})'

    @property
    def notes(self) -> list[dict[str, str]]:
        """Notes (e.g. ``BREAKING CHANGE``) found in the footer."""
        return self._fields.get('notes') or []

    @property
    def revert(self) -> dict[str, str | None] | None:
        """The revert descriptor, or ``None`` if this is not a revert."""
        return self._fields.get('revert')


@runtime_checkable
class CommitParser(Protocol):
    """Protocol for commit message parsers.

    A parser turns a raw message into a :class:`StructuredCommit`. It
    raises :class:`ValueError` for messages it cannot meaningfully parse
    (for example an empty message).

    Built-in implementations:

    - :class:`~commit_analyzer.commit_parsing.GrammarCommitParser`
    """

    def parse(self, message: str, hash: str = '') -> StructuredCommit:
        """Parse a commit message.

        Args:
            message: The full commit message.
            hash: The commit SHA (for reference).

        Returns:
            The structured commit.
        """
        ...
