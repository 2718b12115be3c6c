"""Build-time validation of date/time literals.

Code written with ``civiltime.macros`` helpers, e.g.
``macros.date("2020-02-29")``, can be checked by the ``civiltime-literals``
tool before it ships, and optionally rewritten into plain constructor
calls. Validation uses the rules table only, so it never constructs
runtime values.

Modules:
    grammar: Literal grammar and range validation
    expand: Construction expressions for validated literals
    transform: LibCST checker and rewriter
    settings: Tool configuration
    cli: The ``civiltime-literals`` command
"""

from __future__ import annotations

from civiltime.literals.expand import expand
from civiltime.literals.grammar import LiteralError, parse_literal
from civiltime.literals.transform import Diagnostic, check_source, expand_source

__all__: list[str] = [
    "LiteralError",
    "parse_literal",
    "expand",
    "Diagnostic",
    "check_source",
    "expand_source",
]
