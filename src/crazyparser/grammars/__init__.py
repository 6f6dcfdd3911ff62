"""Grammars built on the public combinator API.

Submodules:
    json_value - JSON decoder (loads)
    markup - Tag/attribute/text markup (parse_markup)

Python 3.13+.
"""

from .json_value import loads
from .markup import parse_markup

__all__ = ["loads", "parse_markup"]
