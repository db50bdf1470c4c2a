"""Tests for the Gradio event handlers."""
import json

import httpx
import pytest

from translation_editor.config import EditorSettings
from translation_editor.errors import ConfigurationError
from translation_editor.handlers import (
    build_view_rows,
    handle_create_pr,
    handle_discard_changes,
    handle_save_proposal,
    handle_search,
    handle_select_path,
    handle_show_proposed,
    load_baseline,
    status_text,
)
from translation_editor.storage import ChangeSetStore

HELLO = '["greetings","english"]'


@pytest.fixture
def store(tmp_path):
    return ChangeSetStore(tmp_path, 'com.example.test')


@pytest.fixture
def settings(tmp_path, catalogue):
    data_file = tmp_path / 'data.json'
    data_file.write_text(json.dumps(catalogue, ensure_ascii=False), encoding='utf-8')
    revision_file = tmp_path / 'revision.json'
    revision_file.write_text(json.dumps({'githubOrg': 'acme', 'repoName': 'tr', 'baseBranch': 'main'}),
                             encoding='utf-8')
    return EditorSettings(
        data_file=data_file,
        revision_file=revision_file,
        storage_dir=tmp_path,
        api_url='http://api.test/create-pr',
    )


def test_load_baseline(settings):
    baseline = load_baseline(settings)
    assert [list(e.path) for e in baseline.entries] == [
        ['greetings', 'english'], ['greetings', 'french'], ['farewells', 'english'],
    ]


def test_load_baseline_missing_file(settings, tmp_path):
    settings.data_file = tmp_path / 'missing.json'
    with pytest.raises(ConfigurationError):
        load_baseline(settings)


def test_build_view_rows_shows_proposals(baseline):
    rows = build_view_rows(baseline, {HELLO: {'en': 'Hi'}})
    assert rows[0] == ['greetings › english', 'Hello', 'こんにちは', 'Hi', '']
    assert rows[1][3:] == ['', '']


def test_build_view_rows_limit(baseline):
    assert len(build_view_rows(baseline, {}, limit=2)) == 2


def test_status_text(baseline):
    assert status_text(baseline, {HELLO: {'en': 'Hi'}, '["other"]': {'en': 'x'}}) == \
        'Changes: 2 (shown: 1) | Entries: 3'


def test_handle_search_filters_and_persists_query(baseline, store):
    rows, status, _ = handle_search(baseline, {}, 'french', False, store=store)
    assert [r[0] for r in rows] == ['greetings › french']
    assert status.startswith('Changes: 0')
    assert store.load_search_query() == 'french'


def test_handle_search_includes_proposed_paths(baseline):
    rows, _, _ = handle_search(baseline, {HELLO: {'en': 'Hi'}}, 'french', True)
    assert [r[0] for r in rows] == ['greetings › french', 'greetings › english']


def test_handle_search_without_data():
    rows, status, _ = handle_search(None, {}, 'x', False)
    assert rows == [] and status == 'No data loaded.'


def test_handle_select_path_prefers_proposal(baseline):
    assert handle_select_path(baseline, {}, HELLO) == ('Hello', 'こんにちは')
    assert handle_select_path(baseline, {HELLO: {'en': 'Hi'}}, HELLO) == ('Hi', '')
    assert handle_select_path(baseline, {}, None) == ('', '')
    assert handle_select_path(baseline, {}, 'not json') == ('', '')


def test_handle_save_proposal_records_and_withdraws(baseline, store):
    changes, rows, status, _ = handle_save_proposal(baseline, {}, HELLO, 'Hi', '', '', False, store=store)
    assert changes == {HELLO: {'en': 'Hi'}}
    assert store.load_changes() == changes
    assert rows[0][3] == 'Hi'
    assert status.startswith('Changes: 1 (shown: 1)')

    changes, _, status, _ = handle_save_proposal(baseline, changes, HELLO, '', '', '', False, store=store)
    assert changes == {}
    assert store.load_changes() == {}


def test_handle_save_proposal_requires_selection(baseline):
    changes, _, status, _ = handle_save_proposal(baseline, {}, None, 'Hi', '', '', False)
    assert changes == {}
    assert status == 'Select an entry first.'


def test_handle_show_proposed(baseline):
    rows, status = handle_show_proposed(baseline, {HELLO: {'en': 'Hi'}})
    assert [r[0] for r in rows] == ['greetings › english']
    rows, _ = handle_show_proposed(baseline, {})
    assert rows == []


def test_handle_discard_changes(baseline, store):
    store.save_changes({HELLO: {'en': 'Hi'}})
    changes, rows, status, _ = handle_discard_changes(baseline, '', False, store=store)
    assert changes == {}
    assert len(rows) == 3
    assert store.load_changes() == {}


def test_handle_create_pr_success(settings):
    sent = {}

    def handler(request):
        sent.update(json.loads(request.content))
        return httpx.Response(200, json={'ok': True})

    client = httpx.Client(transport=httpx.MockTransport(handler))
    message = handle_create_pr({HELLO: {'en': 'Hi'}}, ' Update greeting ', 'Because', settings, client=client)
    assert message.startswith('SUCCESS')
    assert sent['prTitle'] == 'Update greeting'
    assert sent['githubOrg'] == 'acme'
    assert sent['proposedChanges'] == {'greetings': {'english': {'en': 'Hi'}}}


def test_handle_create_pr_reports_errors(settings):
    client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(500, text='boom')))
    message = handle_create_pr({HELLO: {'en': 'Hi'}}, 'Title', '', settings, client=client)
    assert message.startswith('Error creating PR')
    assert '500' in message


def test_handle_create_pr_preconditions(settings):
    assert 'no proposed changes' in handle_create_pr({}, 'Title', '', settings)
    assert 'title' in handle_create_pr({HELLO: {'en': 'Hi'}}, '  ', '', settings)
