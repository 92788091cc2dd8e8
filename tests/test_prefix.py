from jsonscan_lib.prefix import PrefixSkipper, PrefixState


def test_no_prefix_is_a_pass_through():
    sk = PrefixSkipper(None)
    assert sk.state is PrefixState.SKIPPED
    assert sk.feed("abc") == "abc"
    assert PrefixSkipper("").skipped


def test_prefix_split_across_chunks():
    sk = PrefixSkipper("data:")
    assert sk.feed("da") is None
    assert sk.state is PrefixState.PENDING
    assert sk.feed('ta:{"x":1}') == '{"x":1}'
    assert sk.state is PrefixState.SKIPPED


def test_prefix_split_over_many_single_char_chunks():
    sk = PrefixSkipper("data:")
    results = [sk.feed(ch) for ch in "junk data:{}"]
    assert results[:9] == [None] * 9
    assert results[9:] == ["", "{", "}"]


def test_text_before_prefix_is_discarded():
    sk = PrefixSkipper("[")
    assert sk.feed('{"skip":1} [{"a":1}') == '{"a":1}'


def test_prefix_at_end_of_chunk_returns_empty_text():
    sk = PrefixSkipper("data:")
    assert sk.feed("header data:") == ""
    assert sk.feed("{}") == "{}"


def test_window_stays_bounded_while_unmatched():
    sk = PrefixSkipper("data:")
    for _ in range(100):
        assert sk.feed("x" * 1000) is None
    assert len(sk._window) == 4

    single = PrefixSkipper("[")
    assert single.feed("abc") is None
    assert single._window == ""


def test_prefix_is_matched_only_once():
    sk = PrefixSkipper("data:")
    assert sk.feed("data:a") == "a"
    assert sk.feed("data:b") == "data:b"
