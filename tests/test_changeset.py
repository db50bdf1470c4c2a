"""Tests for change-set helpers."""
from translation_editor.changeset import count_shown_changes, merged_value, proposed_paths, record_change
from translation_editor.filtering import TextCriterion, filter_entries


def test_record_change_adds_under_canonical_key():
    changes = record_change({}, ['greetings', 'english'], {'en': 'Hi'})
    assert changes == {'["greetings","english"]': {'en': 'Hi'}}


def test_record_change_accepts_keys_and_does_not_mutate_input():
    original = {'["a"]': {'en': 'old'}}
    updated = record_change(original, '["a"]', {'en': 'new'})
    assert original == {'["a"]': {'en': 'old'}}
    assert updated == {'["a"]': {'en': 'new'}}


def test_record_change_keeps_insertion_order():
    changes = record_change({}, ['a'], {'en': '1'})
    changes = record_change(changes, ['b'], {'en': '2'})
    changes = record_change(changes, ['a'], {'en': '3'})
    assert list(changes) == ['["a"]', '["b"]']


def test_empty_proposal_withdraws_change():
    changes = {'["a"]': {'en': 'x'}, '["b"]': {'ja': 'y'}}
    assert record_change(changes, ['a'], {}) == {'["b"]': {'ja': 'y'}}
    assert record_change(changes, ['b'], {'en': None, 'ja': None}) == {'["a"]': {'en': 'x'}}
    assert record_change(changes, ['missing'], {}) == changes


def test_proposed_paths_skips_malformed_keys():
    changes = {'["a","b"]': {}, 'garbage': {}, '["c"]': {}}
    assert proposed_paths(changes) == [['a', 'b'], ['c']]


def test_count_shown_changes(baseline):
    changes = {'["greetings","english"]': {'en': 'Hi'}, '["farewells","english"]': {'en': 'Bye'}}
    assert count_shown_changes(baseline, changes) == 2
    view = filter_entries(baseline, TextCriterion('greetings'))
    assert count_shown_changes(view, changes) == 1


def test_merged_value_prefers_proposal(baseline):
    entry = baseline.get(['greetings', 'english'])
    assert merged_value(entry, {}) == {'en': 'Hello', 'ja': 'こんにちは'}
    assert merged_value(entry, {entry.key: {'en': 'Hi'}}) == {'en': 'Hi'}
