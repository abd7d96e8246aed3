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


"""Embedded commit grammar presets.

Each preset is a mapping of :class:`~commit_analyzer.commit_parsing.ParserOptions`
fields for a well-known commit convention. The field names a preset
produces are what release rules match against, which is why the default
rules mention ``emoji``, ``tag`` and ``component`` as well as ``type``.

    ┌─────────────────────┬───────────────────────────────┬──────────────────────────────┐
    │ Preset              │ Example header                │ Fields                       │
    ├─────────────────────┼───────────────────────────────┼──────────────────────────────┤
    │ angular             │ feat(scope): subject          │ type, scope, subject         │
    │ conventionalcommits │ feat(scope)!: subject         │ type, scope, subject         │
    │ atom                │ :bug: shortDesc               │ emoji, shortDesc             │
    │ ember               │ [BUGFIX beta] message         │ tag, taggedAs, message       │
    │ eslint              │ Fix: message                  │ tag, message                 │
    │ express             │ deps: shortDesc               │ component, shortDesc         │
    │ jquery              │ Core: shortDesc               │ component, shortDesc         │
    │ jshint              │ [[FIX]] shortDesc             │ type, shortDesc              │
    └─────────────────────┴───────────────────────────────┴──────────────────────────────┘
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from commit_analyzer.commit_parsing._options import DEFAULT_REVERT_PATTERN

ANGULAR: dict[str, Any] = {
    'header_pattern': re.compile(r'^(\w*)(?:\((.*)\))?: (.*)$'),
    'header_correspondence': ('type', 'scope', 'subject'),
    'note_keywords': ('BREAKING CHANGE',),
    'revert_pattern': DEFAULT_REVERT_PATTERN,
    'revert_correspondence': ('header', 'hash'),
}

CONVENTIONALCOMMITS: dict[str, Any] = {
    'header_pattern': re.compile(r'^(\w*)(?:\((.*)\))?!?: (.*)$'),
    'breaking_header_pattern': re.compile(r'^(\w*)(?:\((.*)\))?!: (.*)$'),
    'header_correspondence': ('type', 'scope', 'subject'),
    'note_keywords': ('BREAKING CHANGE', 'BREAKING-CHANGE'),
    'revert_pattern': DEFAULT_REVERT_PATTERN,
    'revert_correspondence': ('header', 'hash'),
}

ATOM: dict[str, Any] = {
    'header_pattern': re.compile(r'^(:.*?:) (.*)$'),
    'header_correspondence': ('emoji', 'shortDesc'),
}

EMBER: dict[str, Any] = {
    'header_pattern': re.compile(r'^\[(.*) (.*)] (.*)$'),
    'header_correspondence': ('tag', 'taggedAs', 'message'),
}

ESLINT: dict[str, Any] = {
    'header_pattern': re.compile(r'^(\w*):\s*(.*)$'),
    'header_correspondence': ('tag', 'message'),
}

EXPRESS: dict[str, Any] = {
    'header_pattern': re.compile(r'^(.*):\s*(.*)$'),
    'header_correspondence': ('component', 'shortDesc'),
}

JQUERY: dict[str, Any] = {
    'header_pattern': re.compile(r'^(\w*): (.*)$'),
    'header_correspondence': ('component', 'shortDesc'),
}

JSHINT: dict[str, Any] = {
    'header_pattern': re.compile(r'^\[\[(.*)]] (.*)$'),
    'header_correspondence': ('type', 'shortDesc'),
}

PRESETS: dict[str, Mapping[str, Any]] = {
    'angular': ANGULAR,
    'atom': ATOM,
    'conventionalcommits': CONVENTIONALCOMMITS,
    'ember': EMBER,
    'eslint': ESLINT,
    'express': EXPRESS,
    'jquery': JQUERY,
    'jshint': JSHINT,
}

DEFAULT_PRESET = 'angular'


def get_preset(name: str) -> Mapping[str, Any] | None:
    """Return the embedded preset called ``name`` (case-insensitive), if any."""
    return PRESETS.get(name.lower())


__all__ = [
    'DEFAULT_PRESET',
    'PRESETS',
    'get_preset',
]
