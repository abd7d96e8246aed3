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


"""Drop commits that were reverted within the analyzed range.

A revert commit carries a descriptor such as
``{'header': 'feat(scope): First feature', 'hash': '123'}``. A commit is
reverted when every non-empty descriptor field equals the commit's field;
hashes also match by prefix, so abbreviated SHAs work. The reverted
commit and the revert itself are both removed: together they have no
effect on the release.
"""

from __future__ import annotations

from collections.abc import Sequence

from commit_analyzer.commit_parsing import StructuredCommit


def _same_hash(a: str, b: str) -> bool:
    return bool(a) and bool(b) and (a.startswith(b) or b.startswith(a))


def is_reverted_by(commit: StructuredCommit, revert: StructuredCommit) -> bool:
    """Return True when ``revert`` reverts ``commit``."""
    descriptor = revert.revert
    if not descriptor or commit is revert:
        return False
    for name, expected in descriptor.items():
        if not expected:
            continue
        if name == 'hash':
            if not _same_hash(commit.hash, expected):
                return False
        elif commit.get(name) != expected:
            return False
    return True


def filter_reverted(commits: Sequence[StructuredCommit]) -> list[StructuredCommit]:
    """Return ``commits`` without reverted commits and their reverts.

    Order is preserved. A revert whose target is not in ``commits`` is
    kept, so it still counts on its own.
    """
    removed: set[int] = set()
    for revert in commits:
        if not revert.revert or id(revert) in removed:
            continue
        for commit in commits:
            if id(commit) not in removed and is_reverted_by(commit, revert):
                removed.update({id(commit), id(revert)})
                break
    return [commit for commit in commits if id(commit) not in removed]


__all__ = [
    'filter_reverted',
    'is_reverted_by',
]
