"""Shared fixtures for translation editor tests."""
import pytest

from translation_editor.editable_node import NOT_A_LEAF
from translation_editor.flattening import build_baseline


def language_leaf(value):
    if isinstance(value, dict) and ('en' in value or 'ja' in value):
        return value
    return NOT_A_LEAF


@pytest.fixture
def catalogue():
    return {
        'greetings': {
            'english': {'en': 'Hello', 'ja': 'こんにちは'},
            'french': {'en': 'Bonjour', 'ja': 'ボンジュール'},
        },
        'farewells': {
            'english': {'en': 'Goodbye', 'ja': 'さようなら'},
        },
    }


@pytest.fixture
def baseline(catalogue):
    return build_baseline(catalogue, language_leaf)
