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


"""Grammar options for the commit parser.

A :class:`ParserOptions` describes how to read a commit message: which
pattern recognizes the header and which names its groups map to, which
footer keywords start a note, and how reverts and merges look. Presets
(:mod:`commit_analyzer.presets`) are just named option sets.

Option mappings may use ``snake_case`` or the ``camelCase`` spelling used
by conventional-changelog presets (``headerPattern``,
``headerCorrespondence``, ...); both normalize to the same field.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any, Union

Pattern = Union[str, re.Pattern[str]]

DEFAULT_HEADER_PATTERN: re.Pattern[str] = re.compile(r'^(\w*)(?:\((.*)\))?: (.*)$')

DEFAULT_REVERT_PATTERN: re.Pattern[str] = re.compile(
    r'^(?:Revert|revert:)\s"?([\s\S]+?)"?\s*This reverts commit (\w*)\.',
    re.IGNORECASE,
)

_CAMEL_RE = re.compile(r'(?<!^)(?=[A-Z])')

_LIST_KEYS = frozenset({
    'header_correspondence',
    'merge_correspondence',
    'note_keywords',
    'revert_correspondence',
})


def normalize_key(key: str) -> str:
    """Return the ``snake_case`` spelling of an option key.

    >>> normalize_key('headerCorrespondence')
    'header_correspondence'
    >>> normalize_key('note_keywords')
    'note_keywords'
    """
    return _CAMEL_RE.sub('_', key).lower()


def merge_options(*layers: Mapping[str, Any] | None) -> dict[str, Any]:
    """Merge option mappings left to right.

    Later layers override earlier ones. Nested mappings merge key by key;
    lists and tuples are replaced wholesale rather than concatenated.
    """
    merged: dict[str, Any] = {}
    for layer in layers:
        if not layer:
            continue
        for raw_key, value in layer.items():
            key = normalize_key(raw_key)
            current = merged.get(key)
            if isinstance(current, Mapping) and isinstance(value, Mapping):
                merged[key] = {**current, **value}
            else:
                merged[key] = value
    return merged


@dataclass(frozen=True)
class ParserOptions:
    """How to parse a commit message.

    Attributes:
        header_pattern: Pattern for the first line. Named groups become
            fields directly; otherwise positional groups are named by
            ``header_correspondence``.
        header_correspondence: Field names for the header groups.
        breaking_header_pattern: Pattern for headers that mark a breaking
            change on their own (``feat!: ...``).
        merge_pattern: Pattern for a leading merge line.
        merge_correspondence: Field names for the merge groups.
        revert_pattern: Pattern matched against the whole message.
        revert_correspondence: Field names for the revert groups.
        note_keywords: Footer keywords that start a note.
        field_pattern: Pattern for ``-field-`` lines that route the
            following lines into a custom field.
        comment_char: Lines starting with this character are dropped.
    """

    header_pattern: Pattern = DEFAULT_HEADER_PATTERN
    header_correspondence: tuple[str, ...] = ('type', 'scope', 'subject')
    breaking_header_pattern: Pattern | None = None
    merge_pattern: Pattern | None = None
    merge_correspondence: tuple[str, ...] = ()
    revert_pattern: Pattern | None = DEFAULT_REVERT_PATTERN
    revert_correspondence: tuple[str, ...] = ('header', 'hash')
    note_keywords: tuple[str, ...] = ('BREAKING CHANGE', 'BREAKING-CHANGE')
    field_pattern: Pattern | None = r'^-(.*?)-$'
    comment_char: str | None = None

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> ParserOptions:
        """Build options from a preset or user mapping.

        Keys the parser does not use (for example ``issuePrefixes`` from
        changelog presets) are ignored. Keyword and correspondence lists
        may also be given as comma-separated strings (``"tag, message"``).
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for raw_key, value in options.items():
            key = normalize_key(raw_key)
            if key not in known:
                continue
            if key in _LIST_KEYS and isinstance(value, str):
                value = tuple(part.strip() for part in value.split(',') if part.strip())
            elif isinstance(value, list):
                value = tuple(value)
            kwargs[key] = value
        return cls(**kwargs)
