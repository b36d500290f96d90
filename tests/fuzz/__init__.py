"""Fuzz testing for streamcomb grammars.

This package contains intensive property tests, excluded from normal runs:
- test_grammar_property: prefix behaviour of streaming grammars and
  robustness of the entry points against arbitrary input

Run with: pytest -m fuzz

Python 3.13+.
"""
