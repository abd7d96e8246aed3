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


"""Tests for the commit_parsing subpackage.

All tests are pure: no I/O and no async.
"""

from __future__ import annotations

import re

import pytest
from commit_analyzer.commit_parsing import (
    CommitParser,
    GrammarCommitParser,
    ParserOptions,
    RawCommit,
    StructuredCommit,
    merge_options,
    normalize_key,
    parse_commit,
)
from commit_analyzer.errors import E, AnalyzerError
from commit_analyzer.presets import PRESETS


def _parser(preset: str) -> GrammarCommitParser:
    return GrammarCommitParser(ParserOptions.from_mapping(PRESETS[preset]))


class TestAngularGrammar:
    """Tests for the default (Angular) grammar."""

    def test_header_fields(self) -> None:
        """Type, scope and subject come from the header."""
        commit = parse_commit('feat(auth): add OAuth2')
        assert commit['type'] == 'feat'
        assert commit['scope'] == 'auth'
        assert commit['subject'] == 'add OAuth2'
        assert commit['header'] == 'feat(auth): add OAuth2'

    def test_breaking_change_note(self) -> None:
        """A BREAKING CHANGE footer becomes a note."""
        commit = parse_commit('feat(test): new feature (fixes #456)\n\n BREAKING CHANGE: break something')
        assert commit['type'] == 'feat'
        assert commit['scope'] == 'test'
        assert commit['subject'] == 'new feature (fixes #456)'
        assert commit.notes[0]['title'] == 'BREAKING CHANGE'
        assert commit.notes[0]['text'] == 'break something'

    def test_no_scope(self) -> None:
        """A header without scope leaves scope empty."""
        commit = parse_commit('fix: First fix')
        assert commit['type'] == 'fix'
        assert commit['scope'] is None

    def test_unmatched_header(self) -> None:
        """Header fields are None when the header does not match."""
        commit = parse_commit('Merge branch main into feature')
        assert commit['type'] is None
        assert commit['subject'] is None
        assert commit['header'] == 'Merge branch main into feature'

    def test_body_and_footer(self) -> None:
        """Lines before the first note are body; the rest is footer."""
        commit = parse_commit('fix: x\n\nsome body\nmore body\n\nBREAKING CHANGE: y\ncontinued')
        assert commit['body'] == 'some body\nmore body'
        assert commit['footer'] == 'BREAKING CHANGE: y\ncontinued'
        assert commit.notes == [{'title': 'BREAKING CHANGE', 'text': 'y\ncontinued'}]

    def test_no_notes(self) -> None:
        """A commit without notes has an empty notes list."""
        commit = parse_commit('fix: x\n\nplain body')
        assert commit.notes == []
        assert commit['footer'] is None

    def test_revert(self) -> None:
        """A revert commit carries the reverted header and hash."""
        commit = parse_commit('revert: feat(scope): First feature\n\nThis reverts commit 123.\n')
        assert commit['type'] == 'revert'
        assert commit.revert == {'header': 'feat(scope): First feature', 'hash': '123'}

    def test_github_revert(self) -> None:
        """GitHub's 'Revert "..."' format is recognized."""
        commit = parse_commit('Revert "feat: add X"\n\nThis reverts commit abc123.')
        assert commit.revert == {'header': 'feat: add X', 'hash': 'abc123'}

    def test_not_a_revert(self) -> None:
        """Ordinary commits have no revert descriptor."""
        assert parse_commit('feat: x').revert is None

    def test_hash_is_kept(self) -> None:
        """The hash is available on the parsed commit."""
        assert parse_commit('fix: x', hash='abc').hash == 'abc'

    def test_empty_message_raises(self) -> None:
        """Empty messages cannot be parsed."""
        with pytest.raises(ValueError, match='non-empty'):
            parse_commit('')
        with pytest.raises(ValueError):
            parse_commit('  \n\n')

    def test_leading_blank_lines_ignored(self) -> None:
        """Blank lines before the header are skipped."""
        assert parse_commit('\n\nfix: x')['type'] == 'fix'


class TestPresetGrammars:
    """Tests for the embedded presets."""

    def test_eslint(self) -> None:
        """ESLint headers produce tag and message."""
        commit = _parser('eslint').parse('Update: new feature (fixes #456)\n\n BREAKING CHANGE: break something')
        assert commit['tag'] == 'Update'
        assert commit['message'] == 'new feature (fixes #456)'
        assert commit.notes[0]['title'] == 'BREAKING CHANGE'
        assert commit.notes[0]['text'] == 'break something'

    def test_conventionalcommits_bang(self) -> None:
        """A '!' header adds a BREAKING CHANGE note with the subject."""
        commit = _parser('conventionalcommits').parse('feat!: Breaking change feature')
        assert commit['type'] == 'feat'
        assert commit.notes == [{'title': 'BREAKING CHANGE', 'text': 'Breaking change feature'}]

    def test_conventionalcommits_bang_keeps_explicit_note(self) -> None:
        """An explicit note is not duplicated by the '!' marker."""
        commit = _parser('conventionalcommits').parse('feat(api)!: x\n\nBREAKING-CHANGE: removed y')
        assert commit.notes == [{'title': 'BREAKING-CHANGE', 'text': 'removed y'}]

    def test_angular_ignores_bang(self) -> None:
        """Angular does not understand '!' so the header does not match."""
        assert _parser('angular').parse('feat!: x')['type'] is None

    def test_atom(self) -> None:
        """atom headers yield the emoji and short description."""
        commit = _parser('atom').parse(':bug: Fix crash')
        assert commit['emoji'] == ':bug:'
        assert commit['shortDesc'] == 'Fix crash'

    def test_ember(self) -> None:
        """ember headers yield the tag, the taggedAs value and the message."""
        commit = _parser('ember').parse('[BUGFIX beta] Fix crash')
        assert commit['tag'] == 'BUGFIX'
        assert commit['taggedAs'] == 'beta'
        assert commit['message'] == 'Fix crash'

    def test_jshint(self) -> None:
        """jshint headers yield the type in double brackets."""
        commit = _parser('jshint').parse('[[FIX]] Fix crash')
        assert commit['type'] == 'FIX'
        assert commit['shortDesc'] == 'Fix crash'

    def test_express(self) -> None:
        """express headers yield the component."""
        assert _parser('express').parse('deps: bump x')['component'] == 'deps'


class TestCustomGrammar:
    """Tests for user-supplied grammar options."""

    def test_positional_correspondence(self) -> None:
        """Positional groups are named by header_correspondence."""
        options = ParserOptions(header_pattern=r'^##(.*?)## (.*)$', header_correspondence=('tag', 'shortDesc'))
        commit = parse_commit('##BUGFIX## First fix (fixes #123)', options)
        assert commit['tag'] == 'BUGFIX'
        assert commit['shortDesc'] == 'First fix (fixes #123)'

    def test_named_groups_win(self) -> None:
        """Named groups become fields directly."""
        options = ParserOptions(header_pattern=r'^%%(?P<type>.*?)%% (?P<subject>.*)$')
        commit = parse_commit('%%fix%% First fix', options)
        assert commit['type'] == 'fix'
        assert commit['subject'] == 'First fix'

    def test_compiled_pattern(self) -> None:
        """Precompiled patterns keep their flags."""
        options = ParserOptions(header_pattern=re.compile(r'^(FIX|FEAT): (.*)$', re.IGNORECASE))
        assert parse_commit('fix: x', options)['type'] == 'fix'

    def test_invalid_pattern(self) -> None:
        """An invalid pattern is a fatal grammar error."""
        with pytest.raises(AnalyzerError) as exc_info:
            GrammarCommitParser(ParserOptions(header_pattern='\\'))
        assert exc_info.value.code == E.PARSER_CONFIG_INVALID
        assert 'header_pattern' in str(exc_info.value)

    def test_note_keywords(self) -> None:
        """Custom note keywords start notes."""
        options = ParserOptions(note_keywords=('BREAKING',))
        commit = parse_commit('fix: x\n\nBREAKING: gone', options)
        assert commit.notes == [{'title': 'BREAKING', 'text': 'gone'}]

    def test_note_keywords_disabled(self) -> None:
        """With no keywords, footers are plain body text."""
        commit = parse_commit('fix: x\n\nBREAKING CHANGE: y', ParserOptions(note_keywords=()))
        assert commit.notes == []
        assert commit['body'] == 'BREAKING CHANGE: y'

    def test_merge_pattern(self) -> None:
        """A merge line is recorded and the next line is the header."""
        options = ParserOptions(
            merge_pattern=r'^Merge pull request #(\d+) from (.*)$',
            merge_correspondence=('id', 'source'),
        )
        commit = parse_commit('Merge pull request #12 from org/branch\nfeat: x', options)
        assert commit['merge'] == 'Merge pull request #12 from org/branch'
        assert commit['id'] == '12'
        assert commit['source'] == 'org/branch'
        assert commit['type'] == 'feat'

    def test_field_pattern(self) -> None:
        """-field- lines route following lines into a custom field."""
        commit = parse_commit('feat: x\n-sha-\nabc123\n-author-\njane')
        assert commit['sha'] == 'abc123'
        assert commit['author'] == 'jane'
        assert commit['body'] is None

    def test_field_pattern_without_group(self) -> None:
        """A field pattern that captures no field name is a grammar error."""
        with pytest.raises(AnalyzerError) as exc_info:
            GrammarCommitParser(ParserOptions(field_pattern=r'^--$'))
        assert exc_info.value.code == E.PARSER_CONFIG_INVALID
        assert 'field_pattern' in str(exc_info.value)

    def test_field_pattern_disabled(self) -> None:
        """Without a field pattern, -field- lines stay in the body."""
        commit = parse_commit('feat: x\n\n-sha-\nabc123', ParserOptions(field_pattern=None))
        assert commit['body'] == '-sha-\nabc123'

    def test_comment_char(self) -> None:
        """Comment lines are dropped."""
        commit = parse_commit('# comment\nfix: x\n# another', ParserOptions(comment_char='#'))
        assert commit['type'] == 'fix'
        assert commit['body'] is None

    def test_revert_disabled(self) -> None:
        """Without a revert pattern nothing is a revert."""
        commit = parse_commit('revert: x\n\nThis reverts commit 1.', ParserOptions(revert_pattern=None))
        assert commit.revert is None


class TestParserOptions:
    """Tests for ParserOptions construction and merging."""

    def test_from_mapping_camel_case(self) -> None:
        """camelCase keys map to fields; lists become tuples."""
        options = ParserOptions.from_mapping({
            'headerPattern': r'^(\w*): (.*)$',
            'headerCorrespondence': ['tag', 'message'],
        })
        assert options.header_pattern == r'^(\w*): (.*)$'
        assert options.header_correspondence == ('tag', 'message')

    def test_from_mapping_ignores_unknown(self) -> None:
        """Options the parser does not use are ignored."""
        options = ParserOptions.from_mapping({'issuePrefixes': ['#'], 'note_keywords': ['X']})
        assert options.note_keywords == ('X',)

    def test_from_mapping_splits_note_keywords_string(self) -> None:
        """A note keyword string is one keyword, not a set of characters."""
        options = ParserOptions.from_mapping({'noteKeywords': 'BREAKING CHANGE'})
        assert options.note_keywords == ('BREAKING CHANGE',)
        commit = parse_commit('fix: something\n\na small tweak to the docs', options)
        assert commit.notes == []

    def test_from_mapping_splits_correspondence_string(self) -> None:
        """Comma-separated correspondence strings become trimmed field names."""
        options = ParserOptions.from_mapping({
            'header_correspondence': 'tag, message',
            'revertCorrespondence': 'header,hash',
            'merge_correspondence': 'id,,source',
            'note_keywords': 'BREAKING CHANGE, BREAKING',
        })
        assert options.header_correspondence == ('tag', 'message')
        assert options.revert_correspondence == ('header', 'hash')
        assert options.merge_correspondence == ('id', 'source')
        assert options.note_keywords == ('BREAKING CHANGE', 'BREAKING')

    def test_from_mapping_keeps_pattern_strings(self) -> None:
        """Pattern strings are not split on commas."""
        options = ParserOptions.from_mapping({'header_pattern': r'^(\w{1,10}): (.*)$'})
        assert options.header_pattern == r'^(\w{1,10}): (.*)$'

    def test_normalize_key(self) -> None:
        """camelCase keys become snake_case; snake_case keys are kept."""
        assert normalize_key('headerPattern') == 'header_pattern'
        assert normalize_key('revert_pattern') == 'revert_pattern'

    def test_merge_replaces_lists(self) -> None:
        """Later layers replace lists instead of merging them."""
        merged = merge_options(
            {'header_correspondence': ['type', 'scope', 'subject'], 'note_keywords': ['BREAKING CHANGE']},
            {'headerCorrespondence': ['tag', 'shortDesc']},
        )
        assert merged == {'header_correspondence': ['tag', 'shortDesc'], 'note_keywords': ['BREAKING CHANGE']}

    def test_merge_skips_empty_layers(self) -> None:
        """None layers are ignored."""
        assert merge_options(None, {'a': 1}, None) == {'a': 1}


class TestTypes:
    """Tests for StructuredCommit, RawCommit and the parser protocol."""

    def test_structured_commit_is_mapping(self) -> None:
        """StructuredCommit behaves like a read-only mapping."""
        commit = StructuredCommit({'type': 'feat'}, hash='1')
        assert dict(commit) == {'type': 'feat'}
        assert commit.get('scope') is None
        assert 'type' in commit
        assert len(commit) == 1
        with pytest.raises(KeyError):
            commit['scope']

    def test_structured_commit_defaults(self) -> None:
        """Missing notes and revert read as empty."""
        commit = StructuredCommit({})
        assert commit.notes == []
        assert commit.revert is None

    def test_raw_commit_coerce(self) -> None:
        """Strings, mappings and RawCommit instances all coerce."""
        assert RawCommit.coerce('fix: x') == RawCommit(message='fix: x')
        assert RawCommit.coerce({'message': 'fix: x', 'hash': '1'}) == RawCommit(message='fix: x', hash='1')
        raw = RawCommit(message='m')
        assert RawCommit.coerce(raw) is raw

    def test_raw_commit_coerce_missing_message(self) -> None:
        """A mapping without a message coerces to an empty message."""
        assert RawCommit.coerce({'hash': '1'}).message == ''

    def test_grammar_parser_satisfies_protocol(self) -> None:
        """GrammarCommitParser is a CommitParser."""
        assert isinstance(GrammarCommitParser(), CommitParser)
