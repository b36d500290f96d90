"""Tests for repetition combinators."""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from streamcomb.syntax import (
    Cursor,
    Fatal,
    Matched,
    Rejected,
    Truncated,
    char,
    halt,
    literal,
    optional,
    other_than,
    repeat_any,
    repeat_some,
    separated_items,
    take_while,
)

# ============================================================================
# REPEAT
# ============================================================================


class TestRepeatAny:
    """repeat_any(p): zero or more."""

    def test_collects_matches(self) -> None:
        """Values are collected until p rejects."""
        outcome = repeat_any(literal("ab"))(Cursor.complete("ababx"))

        assert isinstance(outcome, Matched)
        assert outcome.value == ["ab", "ab"]
        assert outcome.remainder.rest == "x"

    @given(text=st.text(alphabet="xyz", max_size=10))
    def test_zero_matches_is_empty_match(self, text: str) -> None:
        """PROPERTY: zero matches is Matched([], input), never Rejected."""
        cursor = Cursor.complete(text)

        assert repeat_any(char("a"))(cursor) == Matched([], cursor)

    def test_zero_progress_match_terminates(self) -> None:
        """A parser matching without consuming ends the repetition."""
        cursor = Cursor.complete("abc")

        assert repeat_any(take_while(str.isdigit))(cursor) == Matched([], cursor)

    def test_fatal_propagates(self) -> None:
        """Fatal aborts the repetition."""
        parser = repeat_any(halt("item", char("a")))

        assert isinstance(parser(Cursor.complete("aab")), Fatal)

    def test_truncated_keeps_values(self) -> None:
        """Truncated carries the values so far plus any partial."""
        outcome = repeat_any(other_than(","))(Cursor.streaming("abc"))

        assert isinstance(outcome, Truncated)
        assert outcome.partial == ["abc"]

    def test_truncated_without_partial(self) -> None:
        """A Truncated(None) item adds nothing to the values."""
        outcome = repeat_any(literal("ab"))(Cursor.streaming("aba"))

        assert isinstance(outcome, Truncated)
        assert outcome.partial == ["ab"]
        assert outcome.remainder.pos == 2


class TestRepeatSome:
    """repeat_some(p): one or more."""

    def test_one_required(self) -> None:
        """Zero matches is Rejected."""
        assert isinstance(repeat_some(char("a"))(Cursor.complete("b")), Rejected)

    def test_many(self) -> None:
        """Same collection as repeat_any otherwise."""
        outcome = repeat_some(char("a"))(Cursor.complete("aab"))

        assert isinstance(outcome, Matched)
        assert outcome.value == ["a", "a"]


# ============================================================================
# SEPARATED ITEMS
# ============================================================================


class TestSeparatedItems:
    """separated_items(sep, item)."""

    def test_comma_separated(self) -> None:
        """'a,b,c' gives three items and nothing left over."""
        outcome = separated_items(char(","), other_than(","))(Cursor.complete("a,b,c"))

        assert isinstance(outcome, Matched)
        assert outcome.value == ["a", "b", "c"]
        assert outcome.remainder.rest == ""

    def test_trailing_separator_not_consumed(self) -> None:
        """Without an item after it, the separator stays in the remainder."""
        parser = separated_items(char(","), take_while(str.isdigit))
        outcome = parser(Cursor.complete("1,2,]"))

        assert isinstance(outcome, Matched)
        assert outcome.value == ["1", "2", ""]

    def test_no_items(self) -> None:
        """An immediately rejecting item gives an empty list."""
        cursor = Cursor.complete("]")
        outcome = separated_items(char(","), char("a"))(cursor)

        assert outcome == Matched([], cursor)

    def test_item_rejected_after_separator(self) -> None:
        """The match ends after the last item, before the dangling separator."""
        outcome = separated_items(char(","), char("a"))(Cursor.complete("a,a,]"))

        assert isinstance(outcome, Matched)
        assert outcome.value == ["a", "a"]
        assert outcome.remainder.rest == ",]"

    def test_optional_items_allow_empty_segments(self) -> None:
        """'a//b' with optional items keeps the empty middle item."""
        parser = separated_items(char("/"), optional(other_than("/")))
        outcome = parser(Cursor.complete("a//b"))

        assert isinstance(outcome, Matched)
        assert outcome.value == ["a", None, "b"]

    def test_separator_truncated(self) -> None:
        """Streaming input ending where a separator may start is Truncated."""
        outcome = separated_items(literal(", "), char("a"))(Cursor.streaming("a,"))

        assert isinstance(outcome, Truncated)
        assert outcome.partial == ["a"]
        assert outcome.remainder.pos == 1

    def test_item_truncated(self) -> None:
        """A partial item is appended to the items."""
        parser = separated_items(char(","), other_than(","))
        outcome = parser(Cursor.streaming("a,bc"))

        assert isinstance(outcome, Truncated)
        assert outcome.partial == ["a", "bc"]

    def test_fatal_item(self) -> None:
        """Fatal from an item aborts."""
        parser = separated_items(char(","), halt("item", char("a")))

        assert isinstance(parser(Cursor.complete("a,b")), Fatal)

    @given(items=st.lists(st.text(alphabet="abc", min_size=1, max_size=5), min_size=1))
    def test_join_then_split(self, items: list[str]) -> None:
        """PROPERTY: items joined with ',' parse back to the same items."""
        parser = separated_items(char(","), other_than(","))
        outcome = parser(Cursor.complete(",".join(items)))

        assert isinstance(outcome, Matched)
        assert outcome.value == items
        assert outcome.remainder.is_eof
