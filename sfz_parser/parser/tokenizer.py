"""
Tokenizer
=========

Turns SFZ source text into a lazy stream of tokens:

* :class:`~sfz_parser.models.HeaderToken` for ``<region>``, ``<group>`` …
* :class:`~sfz_parser.models.AssignmentToken` for ``key=value``
* :class:`~sfz_parser.models.DefineDirective` /
  :class:`~sfz_parser.models.IncludeDirective` for ``#`` lines

Directive processing is fused into tokenization: a ``#define`` updates the
variable table as soon as it is read, so only the lines after it see the new
value.

Value boundaries
----------------
An unquoted value runs until the next whitespace-separated ``key=``, the next
``<header>`` or the end of the line, which lets sample names contain spaces::

    sample=My Piano C4.wav lokey=60    ->  sample = "My Piano C4.wav"

A value that starts with ``"`` runs to the matching ``"`` and keeps its
whitespace and ``=`` characters verbatim.
"""
from __future__ import annotations

import logging
import re
from typing import Dict, Iterator, Optional

from ..errors import StructuralError, TokenizeError
from ..models import AssignmentToken, DefineDirective, HeaderToken, ScopeKind, Token
from ..passes.comments import StripCommentsPass
from ..passes.directives import DirectiveExpansionPass, is_directive, parse_directive

logger = logging.getLogger(__name__)

_SPACE_RE = re.compile(r"\s*")
_HEADER_RE = re.compile(r"<([^<>]*)>")
_KEY_RE = re.compile(r'([^\s=<>\\"]+)=')

# Where an unquoted value stops: before " key=" or before a header
_VALUE_END_RE = re.compile(r'\s+(?=[^\s=<>\\"]+=)|\s*(?=<[A-Za-z_]\w*\s*>)')


class Tokenizer:
    """
    Lazy SFZ lexer.

    Parameters
    ----------
    variables:
        Initial ``$NAME -> value`` table.  It is copied; the tokenizer's own
        table grows as ``#define`` lines are read and is available afterwards
        as :attr:`variables`.
    """

    def __init__(self, variables: Optional[Dict[str, str]] = None) -> None:
        self._comments = StripCommentsPass()
        self._directives = DirectiveExpansionPass(variables)

    @property
    def variables(self) -> Dict[str, str]:
        return self._directives.variables

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def tokenize(self, text: str) -> Iterator[Token]:
        """
        Yield the tokens of *text* in source order.

        Raises
        ------
        TokenizeError
            Unterminated quote, header or block comment, or a stray token.
        StructuralError
            A header name that is not a known scope kind.
        DirectiveError
            A malformed ``#define`` / ``#include`` line.
        """
        text = self._comments.run(text)

        for line_no, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                continue

            if is_directive(line):
                directive = parse_directive(line, line_no)
                if isinstance(directive, DefineDirective):
                    value = self._directives.substitute(directive.value)
                    self._directives.define(directive.name, value)
                    yield DefineDirective(directive.name, value, line_no)
                else:
                    yield parse_directive(self._directives.substitute(line), line_no)
                continue

            yield from self._lex_line(self._directives.substitute(line), line_no)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _lex_line(self, line: str, line_no: int) -> Iterator[Token]:
        pos = 0
        n = len(line)

        while True:
            pos = _SPACE_RE.match(line, pos).end()
            if pos >= n:
                return

            if line[pos] == "<":
                match = _HEADER_RE.match(line, pos)
                if match is None:
                    raise TokenizeError(f"unterminated header {line[pos:].strip()!r}", line_no)
                name = match.group(1).strip()
                kind = ScopeKind.from_header(name)
                if kind is None:
                    raise StructuralError(f"unknown header <{name}>", line_no)
                logger.debug("line %d: header <%s>", line_no, kind.value)
                yield HeaderToken(kind, line_no)
                pos = match.end()
                continue

            match = _KEY_RE.match(line, pos)
            if match is None:
                raise TokenizeError(f"unexpected text {line[pos:].strip()!r}", line_no)
            name = match.group(1).lower()
            pos = match.end()

            if pos < n and line[pos] == '"':
                end = line.find('"', pos + 1)
                if end == -1:
                    raise TokenizeError(f"unterminated quoted value for '{name}'", line_no)
                value = line[pos + 1:end]
                pos = end + 1
                if pos < n and not line[pos].isspace() and line[pos] != "<":
                    raise TokenizeError(
                        f"unexpected text after quoted value for '{name}'", line_no
                    )
            else:
                stop = _VALUE_END_RE.search(line, pos)
                end = stop.start() if stop else n
                value = line[pos:end].rstrip()
                pos = end

            yield AssignmentToken(name, value, line_no)


def tokenize(text: str) -> Iterator[Token]:
    """Tokenize *text* with a fresh :class:`Tokenizer`."""
    return Tokenizer().tokenize(text)
