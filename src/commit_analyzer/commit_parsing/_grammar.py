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


"""Grammar-driven commit message parser.

Pure implementation: depends only on ``re`` and the sibling modules.
Patterns are compiled once when the parser is built, so a broken grammar
fails before any commit is read.
"""

from __future__ import annotations

import re
from typing import Any

from commit_analyzer.commit_parsing._options import ParserOptions, Pattern
from commit_analyzer.commit_parsing._types import StructuredCommit
from commit_analyzer.errors import E, AnalyzerError


def _compile(name: str, pattern: Pattern | None) -> re.Pattern[str] | None:
    if pattern is None or isinstance(pattern, re.Pattern):
        return pattern
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise AnalyzerError(
            code=E.PARSER_CONFIG_INVALID,
            message=f'Error in commit parser configuration: {name} {pattern!r} is not a valid pattern: {exc}',
            hint='Patterns use Python regular expression syntax; named groups are written (?P<name>...).',
        ) from exc


def _correspond(match: re.Match[str], names: tuple[str, ...]) -> dict[str, Any]:
    """Map the groups of ``match`` to field names.

    Named groups win; otherwise positional groups are zipped with ``names``.
    """
    named = match.groupdict()
    if named:
        return dict(named)
    return dict(zip(names, match.groups()))


class GrammarCommitParser:
    """Parser for commit messages described by :class:`ParserOptions`.

    Produces the fields ``header``, ``body``, ``footer``, ``notes``,
    ``revert`` and ``merge`` plus every name in the header and merge
    correspondences.

    Raises:
        AnalyzerError: With ``CA-PARSER-CONFIG-INVALID`` if a pattern in
            ``options`` does not compile.
    """

    def __init__(self, options: ParserOptions | None = None) -> None:
        self.options = options or ParserOptions()
        opts = self.options
        self._header = _compile('header_pattern', opts.header_pattern)
        self._breaking_header = _compile('breaking_header_pattern', opts.breaking_header_pattern)
        self._merge = _compile('merge_pattern', opts.merge_pattern)
        self._revert = _compile('revert_pattern', opts.revert_pattern)
        self._field = _compile('field_pattern', opts.field_pattern)
        if self._field is not None and self._field.groups < 1:
            raise AnalyzerError(
                code=E.PARSER_CONFIG_INVALID,
                message=(
                    f'Error in commit parser configuration: field_pattern {opts.field_pattern!r} '
                    'must capture the field name in a group'
                ),
                hint='For example: ^-(.*?)-$',
            )
        self._note: re.Pattern[str] | None = None
        if opts.note_keywords:
            keywords = '|'.join(re.escape(k) for k in opts.note_keywords)
            self._note = re.compile(
                rf'^[\s|*]*(?P<title>{keywords})[:\s]+(?P<text>.*)',
                re.IGNORECASE,
            )

    def parse(self, message: str, hash: str = '') -> StructuredCommit:
        """Parse ``message`` into a :class:`StructuredCommit`.

        Args:
            message: The full commit message.
            hash: The commit SHA (for reference).

        Returns:
            The structured commit. Header fields are ``None`` when the
            header does not match the grammar.

        Raises:
            ValueError: If the message is empty.
        """
        if not message or not message.strip():
            raise ValueError('Expected a non-empty commit message')

        opts = self.options
        lines = message.splitlines()
        if opts.comment_char:
            lines = [line for line in lines if not line.startswith(opts.comment_char)]
        while lines and not lines[0].strip():
            lines.pop(0)
        while lines and not lines[-1].strip():
            lines.pop()

        fields: dict[str, Any] = dict.fromkeys(opts.header_correspondence)
        header = lines[0] if lines else ''
        rest = lines[1:]

        merge = None
        if self._merge is not None:
            merge_match = self._merge.match(header)
            if merge_match:
                merge = header
                fields.update(_correspond(merge_match, opts.merge_correspondence))
                header = rest[0] if rest else ''
                rest = rest[1:]

        header_match = self._header.match(header) if self._header is not None else None
        if header_match:
            fields.update(_correspond(header_match, opts.header_correspondence))

        body: list[str] = []
        footer: list[str] = []
        notes: list[dict[str, str]] = []
        note: dict[str, str] | None = None
        field_name: str | None = None

        for line in rest:
            field_match = self._field.match(line) if self._field is not None else None
            if field_match:
                field_name = field_match.group(1)
                fields[field_name] = None
                continue
            if field_name is not None:
                previous = fields[field_name]
                fields[field_name] = line if previous is None else f'{previous}\n{line}'
                continue

            note_match = self._note.match(line) if self._note is not None else None
            if note_match:
                note = {'title': note_match.group('title'), 'text': note_match.group('text')}
                notes.append(note)
                footer.append(line)
            elif note is not None:
                note['text'] = f'{note["text"]}\n{line}'
                footer.append(line)
            else:
                body.append(line)

        for item in notes:
            item['text'] = item['text'].strip()

        if self._breaking_header is not None and not notes:
            breaking_match = self._breaking_header.match(header)
            if breaking_match:
                subject = breaking_match.groups()[-1] if breaking_match.groups() else header
                notes.append({'title': 'BREAKING CHANGE', 'text': subject or ''})

        revert = None
        if self._revert is not None:
            revert_match = self._revert.match(message)
            if revert_match:
                revert = _correspond(revert_match, opts.revert_correspondence)

        fields.update(
            header=header,
            body='\n'.join(body).strip() or None,
            footer='\n'.join(footer).strip() or None,
            notes=notes,
            merge=merge,
            revert=revert,
        )
        return StructuredCommit(fields, hash=hash)
