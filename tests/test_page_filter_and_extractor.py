import pytest

from wiki_author_edits.processing.parser.page_filter import is_in_namespace, namespace_marker
from wiki_author_edits.processing.parser.username_extractor import extract_username


def test_namespace_marker():
    assert namespace_marker(0) == "<ns>0</ns>"
    assert namespace_marker(14, namespace_tag="namespace") == "<namespace>14</namespace>"


@pytest.mark.parametrize("fragment, namespace, expected", [
    ("<page><ns>0</ns></page>", 0, True),
    ("<page><ns>1</ns></page>", 0, False),
    ("<page><ns>10</ns></page>", 0, False),
    ("<page><ns>10</ns></page>", 10, True),
    ("<page><title>x</title></page>", 0, False),
])
def test_is_in_namespace(fragment, namespace, expected):
    assert is_in_namespace(fragment, namespace) is expected


def test_namespace_filter_is_a_substring_match():
    # marker text inside unrelated content still matches
    fragment = "<page><ns>1</ns><text>see <ns>0</ns></text></page>"
    assert is_in_namespace(fragment, 0)


def test_extract_single_username():
    fragment = "<page><ns>0</ns><contributor><username>Alice</username></contributor></page>"
    assert extract_username(fragment) == ("Alice", 1)


def test_username_keeps_spaces_and_case():
    fragment = "<page><username>Jimbo Wales</username></page>"
    assert extract_username(fragment) == ("Jimbo Wales", 1)


def test_anonymous_edit_is_a_miss():
    fragment = "<page><contributor><ip>127.0.0.1</ip></contributor></page>"
    assert extract_username(fragment) is None


def test_two_usernames_is_a_miss():
    fragment = (
        "<page><revision><username>Alice</username></revision>"
        "<revision><username>Bob</username></revision></page>"
    )
    assert extract_username(fragment) is None


def test_unbalanced_markers_is_a_miss():
    assert extract_username("<page><username>Alice</page>") is None


def test_custom_username_tag():
    fragment = "<page><author>Alice</author></page>"
    assert extract_username(fragment, username_tag="author") == ("Alice", 1)
    assert extract_username(fragment) is None
