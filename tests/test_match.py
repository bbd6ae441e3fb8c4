import pytest

from rcshell.match import match


def live(pattern):
    return [ch in "*?[" for ch in pattern]


def test_no_meta_is_equality():
    assert match("a*b", None, "a*b")
    assert not match("a*b", None, "axb")


def test_quoted_star_is_literal():
    assert match("a*", [False, False], "a*")
    assert not match("a*", [False, False], "abc")


@pytest.mark.parametrize("subject", ["", "x", "anything at all", "*"])
def test_star_matches_everything(subject):
    assert match("*", live("*"), subject)


def test_star_in_middle():
    assert match("a*c", live("a*c"), "abbbc")
    assert match("a*c", live("a*c"), "ac")
    assert not match("a*c", live("a*c"), "abd")


def test_question_needs_one_char():
    assert match("a?", live("a?"), "ab")
    assert not match("a?", live("a?"), "a")
    assert not match("a?", live("a?"), "abc")


def test_character_class():
    assert match("[abc]", live("[abc]"), "b")
    assert not match("[abc]", live("[abc]"), "d")


def test_character_range():
    pattern = "[a-c]x"
    assert match(pattern, live(pattern), "bx")
    assert not match(pattern, live(pattern), "dx")


def test_negated_class():
    pattern = "[~a-c]"
    assert match(pattern, live(pattern), "z")
    assert not match(pattern, live(pattern), "a")


def test_trailing_dash_is_literal():
    pattern = "[a-]"
    assert match(pattern, live(pattern), "-")
    assert match(pattern, live(pattern), "a")


def test_leading_bracket_in_class():
    pattern = "[]]"
    assert match(pattern, live(pattern), "]")


def test_unterminated_class_matches_bracket():
    pattern = "[ab"
    assert match(pattern, live(pattern), "[ab")
    assert not match(pattern, live(pattern), "a")


def test_class_does_not_match_empty():
    pattern = "[~a]"
    assert not match(pattern, live(pattern), "")


def test_bad_metacharacter():
    with pytest.raises(ValueError):
        match("x", [True], "x")