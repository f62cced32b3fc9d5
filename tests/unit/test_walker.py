"""Unit tests for the document walker."""

import pytest

from i18ntrans.core.models import format_path
from i18ntrans.core.walker import build_tasks, is_translatable, iter_leaves, walk_document


def test_walk_order_is_depth_first_insertion_order(sample_document):
    """Leaves come out in document order."""
    paths = [entry.path for entry in walk_document(sample_document)]

    assert paths == [
        ("common", "ok"),
        ("common", "cancel"),
        ("menu", "home"),
        ("menu", "items", 0),
        ("menu", "items", 1),
        ("brand",),
    ]


def test_non_string_scalars_are_not_leaves(sample_document):
    """Numbers, booleans and null are skipped by the walker."""
    texts = [entry.text for entry in walk_document(sample_document)]

    assert 2 not in texts
    assert True not in texts
    assert None not in texts


def test_empty_containers():
    assert walk_document({}) == []
    assert walk_document({"a": {}, "b": []}) == []


def test_iter_leaves_with_prefix():
    entries = list(iter_leaves({"x": "值"}, ("root",)))

    assert entries[0].path == ("root", "x")
    assert entries[0].text == "值"


def test_format_path():
    assert format_path(("a", "b", 0, "c")) == "a.b[0].c"
    assert format_path(("title",)) == "title"
    assert format_path(()) == ""


@pytest.mark.parametrize("text,expected", [
    ("你好", True),
    ("Token使用量", True),
    ("API密钥", True),
    ("Hello", False),
    ("OpenAI", False),
    ("123", False),
    ("", False),
    ("   ", False),
])
def test_is_translatable_chinese_source(text, expected):
    assert is_translatable(text, "zh") is expected


def test_is_translatable_latin_source():
    assert is_translatable("Hello", "en") is True
    assert is_translatable("你好", "en") is False


def test_build_tasks_filters_and_keeps_order(sample_document):
    """Only leaves with source-script text become tasks."""
    entries = walk_document(sample_document)
    tasks = build_tasks(entries, "en", "zh")

    assert [t.path for t in tasks] == [
        ("common", "ok"),
        ("common", "cancel"),
        ("menu", "home"),
        ("menu", "items", 0),
        ("menu", "items", 1),
    ]
    assert all(t.target_lang == "en" for t in tasks)
    assert tasks[0].source_text == "确定"
