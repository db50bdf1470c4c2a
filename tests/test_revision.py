"""Tests for revision metadata."""
import subprocess

import pytest

from translation_editor.errors import RevisionError
from translation_editor.revision import (
    Revision,
    load_revision,
    parse_git_url,
    read_revision_from_git,
    resolve_revision,
    write_revision,
)


@pytest.mark.parametrize('url,expected', [
    ('git@github.com:acme/translations.git', {'githubOrg': 'acme', 'repoName': 'translations'}),
    ('git@github.com:acme/translations', {'githubOrg': 'acme', 'repoName': 'translations'}),
    ('https://github.com/acme/translations.git', {'githubOrg': 'acme', 'repoName': 'translations'}),
    ('http://github.com/acme/translations', {'githubOrg': 'acme', 'repoName': 'translations'}),
])
def test_parse_git_url(url, expected):
    assert parse_git_url(url) == expected


def test_parse_git_url_rejects_other_hosts():
    assert parse_git_url('https://gitlab.com/acme/translations.git') is None
    assert parse_git_url('') is None


def test_revision_file_round_trip(tmp_path):
    path = tmp_path / 'revision.json'
    revision = Revision('acme', 'translations', 'main')
    write_revision(revision, path)
    assert load_revision(path) == revision
    assert resolve_revision(path) == revision


def test_invalid_revision_file(tmp_path):
    path = tmp_path / 'revision.json'
    path.write_text('{"githubOrg": "acme"}', encoding='utf-8')
    with pytest.raises(RevisionError):
        load_revision(path)
    with pytest.raises(RevisionError):
        load_revision(tmp_path / 'missing.json')


def test_read_revision_from_git(monkeypatch):
    outputs = {
        ('rev-parse', '--abbrev-ref', 'HEAD'): 'main\n',
        ('config', '--get', 'remote.origin.url'): 'git@github.com:acme/translations.git\n',
    }

    def fake_run(cmd, **kwargs):
        return subprocess.CompletedProcess(cmd, 0, stdout=outputs[tuple(cmd[1:])], stderr='')

    monkeypatch.setattr(subprocess, 'run', fake_run)
    assert read_revision_from_git() == Revision('acme', 'translations', 'main')


def test_read_revision_from_git_failure(monkeypatch):
    def fake_run(cmd, **kwargs):
        return subprocess.CompletedProcess(cmd, 128, stdout='', stderr='fatal: not a git repository')

    monkeypatch.setattr(subprocess, 'run', fake_run)
    with pytest.raises(RevisionError, match='not a git repository'):
        read_revision_from_git()
