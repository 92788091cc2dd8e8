import pytest

from jsonscan_lib.boundary import find_balanced_object_length


@pytest.mark.parametrize(
    "text",
    [
        '{"a":1}',
        '{"a":{"b":{"c":2}}}',
        '{"k":"a{b}c"}',
        '{"k":"}}}"}',
        r'{"k":"a\"b"}',
        r'{"k":"a\\"}',
        r'{"k":"{"}',
        "{}",
    ],
)
def test_complete_object_spans_whole_text(text):
    assert find_balanced_object_length(text, 0) == len(text)


def test_stops_at_first_balanced_object():
    text = '{"a":1}{"b":2}'
    assert find_balanced_object_length(text, 0) == 7
    assert find_balanced_object_length(text, 7) == 7


def test_start_index_offset():
    text = '[ ,{"a":[1,2]} ]'
    start = text.index("{")
    n = find_balanced_object_length(text, start)
    assert text[start:start + n] == '{"a":[1,2]}'


@pytest.mark.parametrize(
    "text",
    [
        "{",
        '{"a":1',
        '{"a":{"b":2}',
        '{"k":"}',
        '{"k":"a\\',
        '{"k":"a\\"}',
    ],
)
def test_incomplete_object_returns_zero(text):
    assert find_balanced_object_length(text, 0) == 0


def test_unterminated_string_swallows_following_braces():
    # Known limitation: an unterminated literal hides the real closing brace.
    assert find_balanced_object_length('{"a":"x}{"b":1}', 0) == 0
