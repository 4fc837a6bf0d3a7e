"""
StripCommentsPass
=================

Removes SFZ comments from source text before any other processing.

SFZ comment forms:
  * ``// …``      – line comment, runs to the end of the line.
  * ``/* … */``   – block comment, may span several lines.

Rules:
  * Comment markers inside a quoted value are literal text.  A value is
    quoted only when its opening ``"`` directly follows the ``=``; a ``"`` in
    the middle of a value is an ordinary character.  On a ``#include`` or
    ``#define`` line a quote may also follow whitespace.
  * Newlines inside a block comment are kept so that every later stage still
    reports the original line numbers.
  * Running the pass twice gives the same result as running it once.
"""
from __future__ import annotations

from ..errors import TokenizeError


class StripCommentsPass:
    """Strips ``//`` and ``/* */`` comments, respecting double quotes."""

    def run(self, text: str) -> str:
        """
        Apply the pass to a whole source text.

        Parameters
        ----------
        text:
            Raw SFZ source.

        Returns
        -------
        str
            The same text with comments removed and line structure intact.

        Raises
        ------
        TokenizeError
            When a ``/*`` block comment is never closed.
        """
        out: list[str] = []
        i = 0
        n = len(text)
        line = 1
        in_quote = False
        directive = _starts_directive(text, 0)

        while i < n:
            ch = text[i]

            if ch == "\n":
                # Quotes never span lines
                in_quote = False
                line += 1
                out.append(ch)
                i += 1
                directive = _starts_directive(text, i)
                continue

            if in_quote:
                if ch == '"':
                    in_quote = False
                out.append(ch)
                i += 1
                continue

            if ch == '"' and _opens_quote(text, i, directive):
                in_quote = True
                out.append(ch)
                i += 1
                continue

            if text.startswith("//", i):
                end = text.find("\n", i)
                i = n if end == -1 else end
                continue

            if text.startswith("/*", i):
                start_line = line
                end = text.find("*/", i + 2)
                if end == -1:
                    raise TokenizeError("unterminated block comment", start_line)
                newlines = text.count("\n", i, end)
                out.append("\n" * newlines)
                line += newlines
                i = end + 2
                continue

            out.append(ch)
            i += 1

        return "".join(out)


def _starts_directive(text: str, i: int) -> bool:
    n = len(text)
    while i < n and text[i] in " \t":
        i += 1
    return i < n and text[i] == "#"


def _opens_quote(text: str, i: int, directive: bool) -> bool:
    """True when the ``"`` at *i* starts a quoted value rather than sitting inside one."""
    if i > 0 and text[i - 1] == "=":
        return True
    return directive and (i == 0 or text[i - 1] in " \t")


def strip_comments(text: str) -> str:
    """Module-level shortcut for :class:`StripCommentsPass`."""
    return StripCommentsPass().run(text)
