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


"""Structured error system for commit-analyzer.

Every error has a unique ``CA-NAMED-KEY`` code, a human-readable message,
and an optional hint with a suggested fix. Calling tooling can react to
:attr:`AnalyzerError.code` instead of parsing message text.

Code categories::

    CA-CONFIG-*       Configuration errors (fatal, raised before analysis)
    CA-RELEASE-*      Release rule validation errors
    CA-MODULE-*       Preset / config / rules module resolution errors
    CA-PARSER-*       Commit grammar errors
    CA-COMMITS-*      Commit input errors (CLI)

Usage::

    from commit_analyzer.errors import AnalyzerError, E

    raise AnalyzerError(
        code=E.RELEASE_INVALID,
        message='"huge" is not a valid release type.',
        hint='Use one of: major, premajor, minor, preminor, patch, prepatch, prerelease.',
    )
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import TextIO

from rich.console import Console
from rich.markup import escape as rich_escape


class ErrorCode(str, Enum):
    """Enumeration of all commit-analyzer diagnostic codes."""

    # Configuration
    CONFIG_NOT_FOUND = 'CA-CONFIG-NOT-FOUND'
    CONFIG_INVALID = 'CA-CONFIG-INVALID'
    CONFIG_INVALID_KEY = 'CA-CONFIG-INVALID-KEY'

    # Release rules
    RELEASE_INVALID = 'CA-RELEASE-INVALID'

    # Module resolution
    MODULE_NOT_FOUND = 'CA-MODULE-NOT-FOUND'

    # Commit grammar
    PARSER_CONFIG_INVALID = 'CA-PARSER-CONFIG-INVALID'

    # Commit input
    COMMITS_INVALID = 'CA-COMMITS-INVALID'


# Convenience alias for shorter imports.
E = ErrorCode


@dataclass(frozen=True)
class ErrorInfo:
    """Metadata for a single error code.

    Attributes:
        code: The ``CA-NAMED-KEY`` error code.
        message: Human-readable description of what went wrong.
        hint: Optional suggestion for how to fix the error.
    """

    code: ErrorCode
    message: str
    hint: str = ''


class AnalyzerError(Exception):
    """Base exception for all commit-analyzer errors.

    Args:
        code: The error code from :class:`ErrorCode`.
        message: Human-readable description of what went wrong.
        hint: Optional suggestion for how to fix the error.
    """

    def __init__(self, code: ErrorCode, message: str, hint: str = '') -> None:
        """Initialize with an error code, message, and optional hint."""
        self.info = ErrorInfo(code=code, message=message, hint=hint)
        super().__init__(f'[{code.value}] {message}')

    @property
    def code(self) -> ErrorCode:
        """The error code."""
        return self.info.code

    @property
    def hint(self) -> str:
        """Suggestion for fixing this error, or empty string."""
        return self.info.hint


ERRORS: dict[ErrorCode, ErrorInfo] = {
    E.CONFIG_NOT_FOUND: ErrorInfo(
        code=E.CONFIG_NOT_FOUND,
        message='The configuration file does not exist.',
        hint='Check the --config-file path, or omit it to use the defaults.',
    ),
    E.CONFIG_INVALID: ErrorInfo(
        code=E.CONFIG_INVALID,
        message='"release_rules" must be a list of rules, or another option has the wrong type.',
        hint='Each rule is a table such as { type = "feat", release = "minor" }.',
    ),
    E.CONFIG_INVALID_KEY: ErrorInfo(
        code=E.CONFIG_INVALID_KEY,
        message='The configuration contains an unknown key.',
        hint='Valid keys are: preset, config, parser_opts, release_rules, initial_phase.',
    ),
    E.RELEASE_INVALID: ErrorInfo(
        code=E.RELEASE_INVALID,
        message='A release rule has no "release" value, or the value is not a release type.',
        hint='Use major, premajor, minor, preminor, patch, prepatch, prerelease, false or null.',
    ),
    E.MODULE_NOT_FOUND: ErrorInfo(
        code=E.MODULE_NOT_FOUND,
        message='A preset, config or release rules module could not be located.',
        hint='Use an importable module name, or a path relative to the working directory.',
    ),
    E.PARSER_CONFIG_INVALID: ErrorInfo(
        code=E.PARSER_CONFIG_INVALID,
        message='The commit grammar configuration is invalid.',
        hint='Check that every *_pattern in parser_opts is a valid regular expression.',
    ),
    E.COMMITS_INVALID: ErrorInfo(
        code=E.COMMITS_INVALID,
        message='The commit input could not be read or is not a list of commits.',
        hint='Pass a JSON array of messages or {"message", "hash"} objects, or NUL-separated text from git log -z --format=%B.',
    ),
}


def explain(code: str) -> str | None:
    """Return a detailed explanation for an error code.

    Args:
        code: The error code string, e.g. ``"CA-RELEASE-INVALID"``.

    Returns:
        A formatted explanation string, or ``None`` if the code is unknown.
    """
    try:
        error_code = ErrorCode(code)
    except ValueError:
        return None

    info = ERRORS.get(error_code)
    if info is None:
        return f'{code}: No detailed explanation available.'

    lines = [f'{code}: {info.message}']
    if info.hint:
        lines.append(f'  Hint: {info.hint}')
    return '\n'.join(lines)


def render_error(exc: AnalyzerError, *, file: TextIO | None = None) -> None:
    """Render an error in compiler style, colored when writing to a TTY.

    Output format::

        error[CA-RELEASE-INVALID]: "huge" is not a valid release type.
          |
          = hint: Use one of: major, minor, patch.

    Args:
        exc: The error to render.
        file: Output stream (defaults to ``sys.stderr``).
    """
    out = file or sys.stderr

    if out.isatty():
        console = Console(file=out, highlight=False)
        msg = rich_escape(exc.info.message)
        console.print(
            f'[bold red]error[/bold red][bold red]\\[{exc.code.value}][/bold red][bold]: {msg}[/bold]',
        )
        if exc.hint:
            hint = rich_escape(exc.hint)
            console.print('  [dim]|[/dim]')
            console.print(f'  [dim]=[/dim] [cyan]hint[/cyan]: {hint}')
        console.print()
    else:
        print(f'error[{exc.code.value}]: {exc.info.message}', file=out)  # noqa: T201 - CLI output
        if exc.hint:
            print('  |', file=out)  # noqa: T201 - CLI output
            print(f'  = hint: {exc.hint}', file=out)  # noqa: T201 - CLI output
        print(file=out)  # noqa: T201 - CLI output


__all__ = [
    'E',
    'ERRORS',
    'AnalyzerError',
    'ErrorCode',
    'ErrorInfo',
    'explain',
    'render_error',
]
