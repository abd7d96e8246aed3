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


"""Determine the semver release type from commit messages.

Parse each commit with a configurable grammar, match it against release
rules (custom first, then the built-in defaults) and keep the most
severe release across all commits.

Usage::

    import asyncio
    from commit_analyzer import analyze_commits

    release = asyncio.run(analyze_commits({}, ['fix: a bug', 'feat: a feature']))
    assert release == 'minor'
"""

__version__ = '0.1.0'

from commit_analyzer.analyzer import analyze_commit, analyze_commits, initial_phase_release
from commit_analyzer.commit_parsing import (
    RELEASE_TYPES,
    ParserOptions,
    RawCommit,
    ReleaseType,
    StructuredCommit,
    is_higher,
    parse_commit,
)
from commit_analyzer.config import AnalyzerConfig, load_config
from commit_analyzer.errors import AnalyzerError, ErrorCode
from commit_analyzer.rules import DEFAULT_RELEASE_RULES, load_release_rules, match_rules
from commit_analyzer.squash import split_squash_commit, split_squash_commits

__all__ = [
    'DEFAULT_RELEASE_RULES',
    'RELEASE_TYPES',
    'AnalyzerConfig',
    'AnalyzerError',
    'ErrorCode',
    'ParserOptions',
    'RawCommit',
    'ReleaseType',
    'StructuredCommit',
    '__version__',
    'analyze_commit',
    'analyze_commits',
    'initial_phase_release',
    'is_higher',
    'load_config',
    'load_release_rules',
    'match_rules',
    'parse_commit',
    'split_squash_commit',
    'split_squash_commits',
]
