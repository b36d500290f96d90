"""Parser combinator engine.

Cursor and outcome types, primitive matchers, combinators, repetition,
diagnostics wrappers and the complete-input runner.

Python 3.13+.
"""

from .combinators import (
    around,
    between,
    either,
    either_of,
    map_result,
    map_result_halt,
    map_value,
    optional,
    peek,
    pipe,
    preceded,
    serial,
    serial3,
    serial4,
    succeed,
    terminated,
)
from .core import parse_all
from .cursor import Cursor
from .outcome import Fatal, Matched, Outcome, Parser, Rejected, Truncated
from .primitives import (
    alpha_char,
    char,
    char_of,
    end_of_input,
    literal,
    other_than,
    peek_char,
    pop,
    satisfy,
    some_chars_of,
    take,
    take_some_while,
    take_while,
)
from .repeat import repeat_any, repeat_some, separated_items
from .wrappers import accept_limit, halt, label

__all__ = [
    "Cursor",
    "Fatal",
    "Matched",
    "Outcome",
    "Parser",
    "Rejected",
    "Truncated",
    "accept_limit",
    "alpha_char",
    "around",
    "between",
    "char",
    "char_of",
    "either",
    "either_of",
    "end_of_input",
    "halt",
    "label",
    "literal",
    "map_result",
    "map_result_halt",
    "map_value",
    "optional",
    "other_than",
    "parse_all",
    "peek",
    "peek_char",
    "pipe",
    "pop",
    "preceded",
    "repeat_any",
    "repeat_some",
    "satisfy",
    "separated_items",
    "serial",
    "serial3",
    "serial4",
    "some_chars_of",
    "succeed",
    "take",
    "take_some_while",
    "take_while",
    "terminated",
]
