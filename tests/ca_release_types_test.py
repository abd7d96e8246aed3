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


"""Tests for the release type ordering.

All tests are pure: no I/O and no async.
"""

from __future__ import annotations

import itertools

import pytest
from commit_analyzer.commit_parsing import (
    RELEASE_TYPES,
    UNSET,
    ReleaseType,
    highest,
    is_higher,
)

# Every value a comparison may see, most severe first.
ALL_VALUES = [*RELEASE_TYPES, False, None, UNSET]


class TestReleaseType:
    """Tests for the ReleaseType enum."""

    def test_values(self) -> None:
        """Members compare equal to their names."""
        assert ReleaseType.MAJOR == 'major'
        assert ReleaseType.PREMAJOR == 'premajor'
        assert ReleaseType.MINOR == 'minor'
        assert ReleaseType.PREMINOR == 'preminor'
        assert ReleaseType.PATCH == 'patch'
        assert ReleaseType.PREPATCH == 'prepatch'
        assert ReleaseType.PRERELEASE == 'prerelease'

    def test_precedence_order(self) -> None:
        """RELEASE_TYPES lists release types from most to least severe."""
        assert [t.value for t in RELEASE_TYPES] == [
            'major',
            'premajor',
            'minor',
            'preminor',
            'patch',
            'prepatch',
            'prerelease',
        ]

    def test_str(self) -> None:
        """str() gives the bare value."""
        assert str(ReleaseType.MINOR) == 'minor'


class TestIsHigher:
    """Tests for the is_higher comparator."""

    def test_compares_release_types(self) -> None:
        """A more severe named type is higher; equal types are not."""
        assert is_higher(ReleaseType.PATCH, ReleaseType.MINOR)
        assert is_higher(ReleaseType.PATCH, ReleaseType.MAJOR)
        assert is_higher(ReleaseType.MINOR, ReleaseType.MAJOR)

        assert not is_higher(ReleaseType.MAJOR, ReleaseType.MAJOR)
        assert not is_higher(ReleaseType.MAJOR, ReleaseType.MINOR)
        assert not is_higher(ReleaseType.MAJOR, ReleaseType.PATCH)
        assert not is_higher(ReleaseType.MINOR, ReleaseType.PATCH)

    def test_accepts_plain_strings(self) -> None:
        """Plain release names work like enum members."""
        assert is_higher('patch', 'minor')
        assert not is_higher('minor', 'patch')

    def test_anything_beats_unset(self) -> None:
        """Any decision replaces an unset current value."""
        for value in ALL_VALUES[:-1]:
            assert is_higher(UNSET, value)

    def test_false_beats_no_release(self) -> None:
        """An explicit suppression outranks null and unset."""
        assert is_higher(None, False)
        assert is_higher(UNSET, False)

    def test_false_does_not_override_named_type(self) -> None:
        """A suppression never replaces a named release type."""
        for release in RELEASE_TYPES:
            assert not is_higher(release, False)
            assert is_higher(False, release)

    def test_irreflexive(self) -> None:
        """No value is higher than itself."""
        for value in ALL_VALUES:
            assert not is_higher(value, value)

    def test_antisymmetric(self) -> None:
        """is_higher(a, b) and is_higher(b, a) are never both true."""
        for a, b in itertools.product(ALL_VALUES, repeat=2):
            assert not (is_higher(a, b) and is_higher(b, a))

    def test_transitive(self) -> None:
        """is_higher is transitive over all values."""
        for a, b, c in itertools.product(ALL_VALUES, repeat=3):
            if is_higher(a, b) and is_higher(b, c):
                assert is_higher(a, c)

    def test_total(self) -> None:
        """Distinct values are always comparable."""
        for a, b in itertools.combinations(ALL_VALUES, 2):
            assert is_higher(a, b) or is_higher(b, a)

    @pytest.mark.parametrize('index', range(len(RELEASE_TYPES)))
    def test_consistent_with_declared_order(self, index: int) -> None:
        """A type is higher than every type listed after it."""
        for lower in RELEASE_TYPES[index + 1 :]:
            assert is_higher(lower, RELEASE_TYPES[index])


class TestHighest:
    """Tests for the highest fold."""

    def test_empty(self) -> None:
        """An empty fold is unset."""
        assert highest([]) is UNSET

    def test_picks_most_severe(self) -> None:
        """highest returns the most severe named type."""
        assert highest([ReleaseType.PATCH, False, ReleaseType.MINOR, None]) == ReleaseType.MINOR

    def test_order_independent(self) -> None:
        """The result does not depend on the order of values."""
        values = [ReleaseType.PRERELEASE, None, False, ReleaseType.PREMINOR]
        for permutation in itertools.permutations(values):
            assert highest(permutation) == ReleaseType.PREMINOR

    def test_suppression_only(self) -> None:
        """False wins when no named type is present."""
        assert highest([None, False]) is False
