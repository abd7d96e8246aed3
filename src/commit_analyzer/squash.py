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


"""Split squash-merge messages into the commits they embed.

``git merge --squash`` writes a message that looks like this::

    Squashed commit of the following:

    commit 5f1e2d3c
    Author: Jane Doe <jane@example.com>
    Date:   Mon Jan 5 10:00:00 2026 +0000

        fix: First fix

    commit 9a8b7c6d
    Author: Jane Doe <jane@example.com>
    Date:   Mon Jan 5 09:00:00 2026 +0000

        feat: Second feature

Each embedded commit is a ``commit``/``Author``/``Date`` block followed
by its message indented by four spaces. Splitting is all-or-nothing: a
message that does not start with the sentinel line, or that has any
malformed block, is returned unchanged as a single commit.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from commit_analyzer.commit_parsing import RawCommit
from commit_analyzer.logging import get_logger

logger = get_logger(__name__)

SQUASH_MERGE_HEADER = 'Squashed commit of the following:'
SQUASH_MERGE_COMMIT_RE = re.compile(r'^commit (?P<hash>[a-f0-9]*)$')
SQUASH_MERGE_AUTHOR_RE = re.compile(r'^Author: .*$')
SQUASH_MERGE_DATE_RE = re.compile(r'^Date: .*$')
SQUASH_MERGE_INDENT = '    '

_LINE_SPLIT_RE = re.compile(r'\r\n|\r|\n')


class MalformedSquashError(ValueError):
    """An embedded commit block is missing its commit/Author/Date lines."""


@dataclass(frozen=True)
class _Block:
    """One embedded commit and the index of the line after it."""

    commit: RawCommit
    end: int


def _next_block(lines: Sequence[str], start: int) -> _Block | None:
    """Read the embedded commit starting at ``start``.

    Returns:
        The block, or ``None`` when only blank lines remain.

    Raises:
        MalformedSquashError: If the block headers are missing or malformed.
    """
    line = start
    while line < len(lines) and lines[line] == '':
        line += 1
    if line >= len(lines):
        return None

    headers = lines[line : line + 3]
    if len(headers) < 3:
        raise MalformedSquashError(f'truncated commit block at line {line}')
    commit_match = SQUASH_MERGE_COMMIT_RE.match(headers[0])
    if not (commit_match and SQUASH_MERGE_AUTHOR_RE.match(headers[1]) and SQUASH_MERGE_DATE_RE.match(headers[2])):
        raise MalformedSquashError(f'malformed commit block at line {line}')
    line += 3

    body: list[str] = []
    while line < len(lines) and (lines[line] == '' or lines[line].startswith(SQUASH_MERGE_INDENT)):
        body.append(lines[line][len(SQUASH_MERGE_INDENT) :])
        line += 1

    message = '\n'.join(body).strip()
    return _Block(RawCommit(message=message, hash=commit_match.group('hash'), squash=True), line)


def split_squash_commit(commit: RawCommit) -> list[RawCommit]:
    """Split ``commit`` into the commits embedded in a squash-merge message.

    Args:
        commit: The commit to split.

    Returns:
        The embedded commits in message order, or ``[commit]`` when the
        message is not a well-formed squash merge.
    """
    lines = _LINE_SPLIT_RE.split(commit.message)
    if lines[0] != SQUASH_MERGE_HEADER:
        return [commit]

    commits: list[RawCommit] = []
    line = 1
    try:
        while line < len(lines):
            block = _next_block(lines, line)
            if block is None:
                break
            commits.append(block.commit)
            line = block.end
    except MalformedSquashError as exc:
        logger.debug('not splitting squash merge', hash=commit.hash, reason=str(exc))
        return [commit]

    if not commits:
        return [commit]
    logger.debug('split squash merge', hash=commit.hash, count=len(commits))
    return commits


def split_squash_commits(commits: Iterable[RawCommit]) -> list[RawCommit]:
    """Flatten ``commits``, expanding squash merges in place."""
    return [split for commit in commits for split in split_squash_commit(commit)]


__all__ = [
    'SQUASH_MERGE_HEADER',
    'split_squash_commit',
    'split_squash_commits',
]
