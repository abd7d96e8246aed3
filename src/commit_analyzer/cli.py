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


"""CLI entry point for commit-analyzer.

Subcommands::

    commit-analyzer analyze    Print the release type for a list of commits
    commit-analyzer explain    Explain an error code

Commit input is either a JSON array (of messages, or of objects with
``message`` and optional ``hash``) or plain text holding NUL-separated
messages, which is what ``git log -z --format=%B`` produces.

Usage::

    git log -z --format=%B v1.2.0..HEAD | commit-analyzer analyze -
    commit-analyzer analyze commits.json --preset conventionalcommits --json
    commit-analyzer explain CA-RELEASE-INVALID
"""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import json
import sys
from pathlib import Path
from typing import Any

from rich_argparse import RichHelpFormatter

from commit_analyzer import __version__
from commit_analyzer.analyzer import analyze_commits
from commit_analyzer.commit_parsing import RawCommit
from commit_analyzer.config import load_config
from commit_analyzer.errors import E, AnalyzerError, explain, render_error
from commit_analyzer.logging import configure_logging, get_logger

logger = get_logger(__name__)


def parse_commit_input(text: str) -> list[RawCommit]:
    """Parse CLI commit input: a JSON array or NUL-separated messages.

    Bracketed text that parses as a JSON array is read as commits. Anything
    else, including messages such as ``[BUGFIX beta] Fix crash [#123]``,
    is read as NUL-separated plain text.

    Raises:
        AnalyzerError: ``CA-COMMITS-INVALID`` for a JSON array whose items
            are neither strings nor objects.
    """
    stripped = text.strip()
    if stripped.startswith('[') and stripped.endswith(']'):
        try:
            data: Any = json.loads(stripped)
        except json.JSONDecodeError:
            data = None
        if isinstance(data, list):
            if not all(isinstance(item, (str, dict)) for item in data):
                raise AnalyzerError(
                    code=E.COMMITS_INVALID,
                    message='Commit input must be an array of strings or objects',
                    hint='Pass a JSON array of messages or of {"message", "hash"} objects.',
                )
            return [RawCommit.coerce(item) for item in data]
    return [RawCommit(message=chunk.strip('\n')) for chunk in text.split('\0') if chunk.strip()]


def _read_input(source: str) -> str:
    if source == '-':
        return sys.stdin.read()
    try:
        return Path(source).read_text(encoding='utf-8')
    except OSError as exc:
        raise AnalyzerError(
            code=E.COMMITS_INVALID,
            message=f'Cannot read commits from {source}: {exc}',
        ) from exc


async def _cmd_analyze(args: argparse.Namespace) -> int:
    """Handle the ``analyze`` subcommand."""
    cfg = load_config(args.config_file)
    overrides: dict[str, Any] = {}
    if args.preset:
        overrides['preset'] = args.preset
    if args.grammar:
        overrides['config'] = args.grammar
    if args.release_rules:
        overrides['release_rules'] = args.release_rules
    if args.initial_phase:
        overrides['initial_phase'] = True
    if overrides:
        cfg = dataclasses.replace(cfg, **overrides)

    commits = parse_commit_input(_read_input(args.commits))
    release = await analyze_commits(cfg, commits)

    if args.json:
        print(json.dumps({'release': release.value if release else None, 'commits': len(commits)}))  # noqa: T201 - CLI output
    else:
        print(release.value if release else 'none')  # noqa: T201 - CLI output
    return 0


def _cmd_explain(args: argparse.Namespace) -> int:
    """Handle the ``explain`` subcommand."""
    result = explain(args.code)
    if result is None:
        print(f'Unknown error code: {args.code}')  # noqa: T201 - CLI output
        return 1
    print(result)  # noqa: T201 - CLI output
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser.

    Returns:
        Configured :class:`argparse.ArgumentParser`.
    """
    RichHelpFormatter.styles['argparse.groups'] = 'bold yellow'
    parser = argparse.ArgumentParser(
        prog='commit-analyzer',
        description='Determine the semver release type from commit messages.',
        formatter_class=RichHelpFormatter,
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}',
    )
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging.')
    parser.add_argument('--quiet', '-q', action='store_true', help='Only log warnings and errors.')
    parser.add_argument('--json-log', action='store_true', help='Log JSON lines to stderr.')

    subparsers = parser.add_subparsers(dest='command')

    analyze_parser = subparsers.add_parser(
        'analyze',
        help='Print the release type for a list of commits.',
        formatter_class=RichHelpFormatter,
    )
    analyze_parser.add_argument(
        'commits',
        nargs='?',
        default='-',
        help="JSON array or NUL-separated messages; '-' reads stdin (default).",
    )
    analyze_parser.add_argument(
        '--config-file',
        type=Path,
        default=None,
        help='Path to commit-analyzer.toml (default: ./commit-analyzer.toml if present).',
    )
    analyze_parser.add_argument('--preset', default=None, help='Grammar preset, e.g. angular, eslint.')
    analyze_parser.add_argument(
        '--grammar',
        default=None,
        metavar='MODULE',
        help='Module defining PARSER_OPTS (overrides the config file "config" key).',
    )
    analyze_parser.add_argument(
        '--release-rules',
        default=None,
        metavar='REF',
        help='Module or .toml/.json file defining custom release rules.',
    )
    analyze_parser.add_argument(
        '--initial-phase',
        action='store_true',
        help='Demote major to minor and minor to patch (initial 0.x development).',
    )
    analyze_parser.add_argument('--json', action='store_true', help='Print the result as JSON.')

    explain_parser = subparsers.add_parser(
        'explain',
        help='Explain an error code.',
        formatter_class=RichHelpFormatter,
    )
    explain_parser.add_argument('code', help='Error code, e.g. CA-RELEASE-INVALID.')

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet, json_log=args.json_log)

    try:
        command = args.command
        if command == 'analyze':
            return asyncio.run(_cmd_analyze(args))
        if command == 'explain':
            return _cmd_explain(args)

        parser.print_help()  # noqa: T201 - CLI output
        print(  # noqa: T201 - CLI output
            f'\n{parser.prog}: error: please provide a command',
            file=sys.stderr,
        )
        return 2

    except AnalyzerError as exc:
        render_error(exc)
        return 1
    except KeyboardInterrupt:
        logger.info('interrupted')
        return 130


def _main() -> None:
    """Wrapper for pyproject.toml [project.scripts] entry point."""
    sys.exit(main())


__all__ = [
    'build_parser',
    'main',
    'parse_commit_input',
]
