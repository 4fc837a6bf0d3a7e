"""
DirectiveExpansionPass
======================

Processes the two SFZ pre-processor directives.

``#define $NAME value``
    Records ``NAME -> value`` in the variable table.  Every *later*
    occurrence of ``$NAME`` in the source is replaced by ``value`` (names are
    case-sensitive; a redefinition only affects the lines that follow it).

``#include "path"``
    Never resolved here: file I/O belongs to
    :class:`~sfz_parser.pipeline.include_loader.IncludeLoader`, which
    flattens includes before the text reaches this pass.  Any include line
    that is still present is passed through (after variable substitution) so
    the tokenizer can surface it.

Substitution picks the longest defined name first, so ``$VOLUME`` is never
mistaken for ``$VOL`` followed by ``UME``.  An undefined ``$NAME`` is left
verbatim.
"""
from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Pattern, Tuple

from ..errors import DirectiveError
from ..models import DefineDirective, Directive, IncludeDirective
from .comments import StripCommentsPass

logger = logging.getLogger(__name__)

_DIRECTIVE_RE = re.compile(r"#(\w*)")
_DEFINE_RE = re.compile(r"\s+(\S+)(?:\s+(.*?))?\s*$")
_VARIABLE_NAME_RE = re.compile(r"\$(\w+)$")


def is_directive(line: str) -> bool:
    """True when the first non-blank character of *line* is ``#``."""
    return line.lstrip().startswith("#")


def parse_directive(line: str, line_no: int = 0) -> Directive:
    """
    Parse a single directive line.

    Parameters
    ----------
    line:
        Source line whose first non-blank character is ``#``.
    line_no:
        1-based line number, used in error messages.

    Returns
    -------
    DefineDirective | IncludeDirective

    Raises
    ------
    DirectiveError
        Missing name, missing value, missing / unterminated include path or
        an unknown directive word.
    """
    stripped = line.strip()
    match = _DIRECTIVE_RE.match(stripped)
    word = match.group(1) if match else ""
    rest = stripped[len(word) + 1:]

    if word == "define":
        return _parse_define(rest, line_no)
    if word == "include":
        return _parse_include(rest, line_no)
    raise DirectiveError(f"unknown directive '#{word}'", line_no)


def _parse_define(rest: str, line_no: int) -> DefineDirective:
    if not rest.strip():
        raise DirectiveError("#define is missing a variable name", line_no)
    match = _DEFINE_RE.match(rest)
    if not match:
        raise DirectiveError(f"malformed #define: {rest.strip()!r}", line_no)

    name_token, value = match.group(1), match.group(2)
    name_match = _VARIABLE_NAME_RE.match(name_token)
    if not name_match:
        raise DirectiveError(
            f"#define variable name must look like $NAME, got {name_token!r}",
            line_no,
        )
    if not value:
        raise DirectiveError(f"#define {name_token} is missing a value", line_no)
    return DefineDirective(name=name_match.group(1), value=value, line=line_no)


def _parse_include(rest: str, line_no: int) -> IncludeDirective:
    body = rest.strip()
    if not body:
        raise DirectiveError("#include is missing a path", line_no)
    if not body.startswith('"'):
        raise DirectiveError(f"#include path must be quoted, got {body!r}", line_no)
    end = body.find('"', 1)
    if end == -1:
        raise DirectiveError("unterminated #include path", line_no)
    path = body[1:end]
    if not path.strip():
        raise DirectiveError("#include is missing a path", line_no)
    if body[end + 1:].strip():
        raise DirectiveError(
            f"unexpected text after #include path: {body[end + 1:].strip()!r}",
            line_no,
        )
    return IncludeDirective(path=path, line=line_no)


# ---------------------------------------------------------------------------
# Variable substitution
# ---------------------------------------------------------------------------


def compile_variables(variables: Dict[str, str]) -> Optional[Pattern[str]]:
    """Build the longest-name-first ``$NAME`` pattern for *variables*."""
    if not variables:
        return None
    names = sorted(variables, key=len, reverse=True)
    return re.compile(r"\$(" + "|".join(re.escape(n) for n in names) + r")")


def substitute(
    text: str,
    variables: Dict[str, str],
    pattern: Optional[Pattern[str]] = None,
) -> str:
    """Replace every defined ``$NAME`` in *text* in a single left-to-right pass."""
    if not variables or "$" not in text:
        return text
    pattern = pattern or compile_variables(variables)
    return pattern.sub(lambda m: variables[m.group(1)], text)


class DirectiveExpansionPass:
    """
    Expands ``#define`` variables over a whole source text.

    After :meth:`run`, :attr:`variables` holds the final variable table.
    """

    def __init__(self, variables: Optional[Dict[str, str]] = None) -> None:
        self.variables: Dict[str, str] = dict(variables or {})
        self._pattern = compile_variables(self.variables)

    def define(self, name: str, value: str) -> None:
        self.variables[name] = value
        self._pattern = compile_variables(self.variables)

    def substitute(self, text: str) -> str:
        return substitute(text, self.variables, self._pattern)

    def run(self, text: str) -> str:
        """
        Expand directives in *text*.

        ``#define`` lines are consumed and replaced by empty lines so later
        stages keep the original line numbering; ``#include`` lines are kept.

        Raises
        ------
        DirectiveError
            On the first malformed directive.
        """
        text = StripCommentsPass().run(text)
        result: List[str] = []

        for line_no, line in enumerate(text.splitlines(), start=1):
            if not is_directive(line):
                result.append(self.substitute(line))
                continue

            # The name of a redefinition must not itself be substituted
            directive = parse_directive(line, line_no)
            if isinstance(directive, DefineDirective):
                value = self.substitute(directive.value)
                logger.debug("line %d: define $%s = %r", line_no, directive.name, value)
                self.define(directive.name, value)
                result.append("")
            else:
                result.append(self.substitute(line))

        return "\n".join(result)


def expand_directives(text: str) -> Tuple[str, Dict[str, str]]:
    """
    Pre-pass form of the directive processor.

    Returns
    -------
    Tuple[str, Dict[str, str]]
        The expanded text and the final variable table.
    """
    expander = DirectiveExpansionPass()
    expanded = expander.run(text)
    return expanded, expander.variables
