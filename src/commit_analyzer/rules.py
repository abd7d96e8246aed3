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


"""Release rules: loading, validation and matching.

A rule maps commit fields to a release type::

    {'type': 'feat', 'release': 'minor'}
    {'type': 'docs', 'scope': 'README*', 'release': 'patch'}
    {'subject': re.compile(r'^security'), 'release': 'patch'}
    {'breaking': True, 'release': 'major'}

Every field value is classified once, when the rule is loaded:

    ┌──────────────┬──────────────────────────────┬────────────────────────────┐
    │ Matcher      │ Rule value                   │ Accepts commit value when  │
    ├──────────────┼──────────────────────────────┼────────────────────────────┤
    │ RegexMatcher │ re.Pattern, or '/.../' str   │ pattern.search(str(value)) │
    │ GlobMatcher  │ str containing * ? or [      │ fnmatchcase(value, glob)   │
    │ ValueMatcher │ anything else                │ value == rule value        │
    └──────────────┴──────────────────────────────┴────────────────────────────┘

``breaking: True`` additionally requires at least one note on the commit,
and ``revert: True`` requires a revert descriptor.

Matching finds *every* rule that accepts a commit and keeps the most
severe release among them, so the order of a rule set never changes the
result. Rule sets come from a :class:`RuleSource`: either embedded data
(:class:`EmbeddedRuleSource`) or a resolved module or data file
(:class:`ModuleRuleSource`).
"""

from __future__ import annotations

import fnmatch
import json
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import Any, Protocol, Union, runtime_checkable

from commit_analyzer.commit_parsing import (
    RELEASE_TYPES,
    UNSET,
    MatchResult,
    ReleaseType,
    ReleaseValue,
    StructuredCommit,
    is_higher,
)
from commit_analyzer.errors import E, AnalyzerError
from commit_analyzer.loader import load_reference
from commit_analyzer.logging import get_logger

logger = get_logger(__name__)

# A string wrapped in slashes is a regular expression: '/^feat/'.
_REGEX_LITERAL_RE = re.compile(r'^/(.*)/$', re.DOTALL)
_GLOB_CHARS = frozenset('*?[')

# Rule keys with special meaning; everything else is a commit field.
_FLAG_KEYS = frozenset({'release', 'breaking', 'revert'})

# Attribute a Python rules module must define.
RULES_ATTRIBUTE = 'RELEASE_RULES'


@dataclass(frozen=True)
class ValueMatcher:
    """Exact (structural) equality."""

    value: Any

    def matches(self, actual: Any) -> bool:  # noqa: ANN401
        """Return True when ``actual`` equals the rule value."""
        return actual == self.value


@dataclass(frozen=True)
class GlobMatcher:
    """Shell-style glob on string fields (``'b*'`` matches ``'bar'``)."""

    pattern: str

    def matches(self, actual: Any) -> bool:  # noqa: ANN401
        """Return True when ``actual`` is a string matching the glob."""
        if not isinstance(actual, str):
            return False
        return fnmatch.fnmatchcase(actual, self.pattern)


@dataclass(frozen=True)
class RegexMatcher:
    """Regular expression searched in the stringified field."""

    pattern: re.Pattern[str]

    def matches(self, actual: Any) -> bool:  # noqa: ANN401
        """Return True when the pattern is found in ``str(actual)``."""
        if actual is None:
            return False
        return self.pattern.search(str(actual)) is not None


FieldMatcher = Union[ValueMatcher, GlobMatcher, RegexMatcher]


def classify(value: Any) -> FieldMatcher:  # noqa: ANN401
    """Classify a rule field value as a regex, glob or exact matcher.

    Raises:
        AnalyzerError: ``CA-CONFIG-INVALID`` for a ``/.../`` value that is
            not a valid regular expression.
    """
    if isinstance(value, re.Pattern):
        return RegexMatcher(value)
    if isinstance(value, str):
        regex = _REGEX_LITERAL_RE.match(value)
        if regex:
            try:
                return RegexMatcher(re.compile(regex.group(1)))
            except re.error as exc:
                raise AnalyzerError(
                    code=E.CONFIG_INVALID,
                    message=f'Error in commit-analyzer configuration: {value!r} is not a valid regular expression: {exc}',
                    hint='Regular expressions in rules are written as "/pattern/".',
                ) from exc
        if _GLOB_CHARS.intersection(value):
            return GlobMatcher(value)
    return ValueMatcher(value)


@dataclass(frozen=True)
class Rule:
    """A validated release rule.

    Attributes:
        fields: ``(field name, matcher)`` pairs; all must accept the commit.
        release: The release to apply when the rule matches.
        breaking: Require at least one note on the commit.
        revert: Require the commit to be a revert.
    """

    fields: tuple[tuple[str, FieldMatcher], ...]
    release: ReleaseValue
    breaking: bool = False
    revert: bool = False

    def matches(self, commit: StructuredCommit) -> bool:
        """Return True when every condition of the rule holds for ``commit``."""
        if self.breaking and not commit.notes:
            return False
        if self.revert and not commit.revert:
            return False
        return all(matcher.matches(commit.get(name)) for name, matcher in self.fields)


RuleSet = tuple[Rule, ...]


def _parse_release(value: Any) -> ReleaseValue:  # noqa: ANN401
    if value is None or value is False:
        return value
    if isinstance(value, str):
        try:
            return ReleaseType(value)
        except ValueError:
            pass
    valid = json.dumps([t.value for t in RELEASE_TYPES])
    raise AnalyzerError(
        code=E.RELEASE_INVALID,
        message=f'Error in commit-analyzer configuration: "{value}" is not a valid release type. Valid values are: {valid}',
        hint='A rule may also set release to false (suppress) or null (no release).',
    )


def build_rule(raw: Any) -> Rule:  # noqa: ANN401
    """Validate one rule mapping and classify its fields.

    Raises:
        AnalyzerError: ``CA-RELEASE-INVALID`` when the rule is not a mapping
            with a valid ``release`` key.
    """
    if not isinstance(raw, Mapping) or 'release' not in raw:
        raise AnalyzerError(
            code=E.RELEASE_INVALID,
            message='Error in commit-analyzer configuration: rules must be an object with a "release" property',
            hint='Example rule: { type = "feat", release = "minor" }.',
        )
    return Rule(
        fields=tuple((name, classify(value)) for name, value in raw.items() if name not in _FLAG_KEYS),
        release=_parse_release(raw['release']),
        breaking=raw.get('breaking') is True,
        revert=raw.get('revert') is True,
    )


def build_rule_set(raw: Any) -> RuleSet:  # noqa: ANN401
    """Validate a list of rule mappings.

    Raises:
        AnalyzerError: ``CA-CONFIG-INVALID`` if ``raw`` is not a list, or
            ``CA-RELEASE-INVALID`` for an invalid rule.
    """
    if isinstance(raw, (str, bytes, Mapping)) or not isinstance(raw, Sequence):
        raise AnalyzerError(
            code=E.CONFIG_INVALID,
            message='Error in commit-analyzer configuration: "release_rules" must be an array of rules',
            hint='Pass a list of rules, or the name of a module or file that defines one.',
        )
    return tuple(build_rule(item) for item in raw)


def match_rules(rules: RuleSet, commit: StructuredCommit) -> MatchResult:
    """Return the most severe release among the rules matching ``commit``.

    Args:
        rules: The rule set to evaluate.
        commit: The parsed commit.

    Returns:
        The winning release (possibly ``False`` or ``None``), or ``UNSET``
        if no rule matched.
    """
    best: MatchResult = UNSET
    for rule in rules:
        if not rule.matches(commit):
            continue
        if is_higher(best, rule.release):
            best = rule.release
            if best == RELEASE_TYPES[0]:
                break
    return best


@runtime_checkable
class RuleSource(Protocol):
    """Something that produces a validated :data:`RuleSet`."""

    def load(self) -> RuleSet:
        """Return the validated rule set."""
        ...


@dataclass(frozen=True)
class EmbeddedRuleSource:
    """Rules given inline as data."""

    rules: Sequence[Mapping[str, Any]]

    def load(self) -> RuleSet:
        """Validate and return the inline rules."""
        return build_rule_set(self.rules)


@dataclass(frozen=True)
class ModuleRuleSource:
    """Rules resolved from a module name or a ``.py``/``.toml``/``.json`` path.

    Python modules define ``RELEASE_RULES``; TOML files hold ``[[rules]]``
    tables; JSON files hold a list (or an object with a ``rules`` list).
    """

    reference: str
    cwd: Path | None = None

    def load(self) -> RuleSet:
        """Resolve the reference and validate the rules it defines."""
        loaded = load_reference(self.reference, self.cwd)
        if isinstance(loaded, ModuleType):
            loaded = getattr(loaded, RULES_ATTRIBUTE, None)
        elif isinstance(loaded, Mapping) and 'rules' in loaded:
            loaded = loaded['rules']
        rules = build_rule_set(loaded)
        logger.debug('loaded release rules', reference=self.reference, count=len(rules))
        return rules


def rule_source(value: str | Sequence[Mapping[str, Any]], cwd: Path | None = None) -> RuleSource:
    """Return the :class:`RuleSource` for a ``release_rules`` option value."""
    if isinstance(value, str):
        return ModuleRuleSource(value, cwd)
    return EmbeddedRuleSource(value)


def load_release_rules(value: Any, cwd: Path | None = None) -> RuleSet | None:  # noqa: ANN401
    """Load and validate the ``release_rules`` option.

    Returns:
        The rule set, or ``None`` when no custom rules are configured.
    """
    if value is None:
        return None
    return rule_source(value, cwd).load()


DEFAULT_RELEASE_RULES: RuleSet = build_rule_set([
    {'breaking': True, 'release': 'major'},
    {'revert': True, 'release': 'patch'},
    # Angular
    {'type': 'feat', 'release': 'minor'},
    {'type': 'fix', 'release': 'patch'},
    {'type': 'perf', 'release': 'patch'},
    # Atom
    {'emoji': ':racehorse:', 'release': 'patch'},
    {'emoji': ':bug:', 'release': 'patch'},
    {'emoji': ':penguin:', 'release': 'patch'},
    {'emoji': ':apple:', 'release': 'patch'},
    {'emoji': ':checkered_flag:', 'release': 'patch'},
    # Ember
    {'tag': 'BUGFIX', 'release': 'patch'},
    {'tag': 'FEATURE', 'release': 'minor'},
    {'tag': 'SECURITY', 'release': 'patch'},
    # ESLint
    {'tag': 'Breaking', 'release': 'major'},
    {'tag': 'Fix', 'release': 'patch'},
    {'tag': 'Update', 'release': 'minor'},
    {'tag': 'New', 'release': 'minor'},
    # Express
    {'component': 'perf', 'release': 'patch'},
    {'component': 'deps', 'release': 'patch'},
    # JSHint
    {'type': 'FEAT', 'release': 'minor'},
    {'type': 'FIX', 'release': 'patch'},
])


__all__ = [
    'DEFAULT_RELEASE_RULES',
    'EmbeddedRuleSource',
    'GlobMatcher',
    'ModuleRuleSource',
    'RegexMatcher',
    'Rule',
    'RuleSet',
    'RuleSource',
    'ValueMatcher',
    'build_rule',
    'build_rule_set',
    'classify',
    'load_release_rules',
    'match_rules',
]
