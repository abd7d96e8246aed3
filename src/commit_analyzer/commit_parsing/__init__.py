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


"""Commit message parsing.

This subpackage turns raw commit text into a :class:`StructuredCommit`
according to a configurable grammar (:class:`ParserOptions`), and holds
the release-type vocabulary shared by the rest of the analyzer.

Built-in parsers:

- :class:`GrammarCommitParser`: driven by header/footer/revert patterns

Usage::

    from commit_analyzer.commit_parsing import ParserOptions, parse_commit

    commit = parse_commit('feat(auth): add OAuth2')
    assert commit['type'] == 'feat'
    assert commit['scope'] == 'auth'

    eslint = ParserOptions(header_pattern=r'^(\\w*):\\s*(.*)$', header_correspondence=('tag', 'message'))
    assert parse_commit('Fix: a bug', eslint)['tag'] == 'Fix'
"""

from commit_analyzer.commit_parsing._grammar import GrammarCommitParser
from commit_analyzer.commit_parsing._options import ParserOptions, merge_options, normalize_key
from commit_analyzer.commit_parsing._types import (
    RELEASE_TYPES,
    UNSET,
    CommitParser,
    MatchResult,
    RawCommit,
    ReleaseType,
    ReleaseValue,
    StructuredCommit,
    highest,
    is_higher,
)

# Module-level singleton for convenience.
_DEFAULT_PARSER = GrammarCommitParser()


def parse_commit(message: str, options: ParserOptions | None = None, hash: str = '') -> StructuredCommit:
    """Parse a single commit message.

    Args:
        message: The full commit message.
        options: Grammar options; the Angular grammar when omitted.
        hash: The commit SHA (for reference).

    Returns:
        The parsed :class:`StructuredCommit`.
    """
    parser = _DEFAULT_PARSER if options is None else GrammarCommitParser(options)
    return parser.parse(message, hash=hash)


__all__ = [
    'RELEASE_TYPES',
    'UNSET',
    'CommitParser',
    'GrammarCommitParser',
    'MatchResult',
    'ParserOptions',
    'RawCommit',
    'ReleaseType',
    'ReleaseValue',
    'StructuredCommit',
    'highest',
    'is_higher',
    'merge_options',
    'normalize_key',
    'parse_commit',
]
