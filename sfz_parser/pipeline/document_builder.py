"""
DocumentBuilder
===============

Consumes a token stream and builds the scope tree of a
:class:`~sfz_parser.models.Document`.

Chain scopes nest by rank (``global`` 0 < ``master`` 1 < ``group`` 2 <
``region`` 3).  The builder keeps an explicit stack of the open chain scopes,
with the Global root always at the bottom.  On a chain header of rank *r* it
pops every open scope whose rank is ``>= r`` and pushes the new scope as a
child of whatever is left on top.  So:

* ``<region>`` after ``<region>`` gives two siblings under the same parent;
* ``<group>`` after ``<master>`` nests under the master;
* ``<master>`` closes any open group and region;
* ``<region>`` with no group or master above hangs directly under Global.

``<global>`` always returns to the root.  A second ``<global>`` merges into
the same root and records a ``DUPLICATE_GLOBAL`` warning.

Side scopes (``<control>``, ``<curve>``, ``<effect>``, ``<midi>``,
``<sample>``) close any open region and collect the following assignments
until the next chain header.  They live in their own lists on the document
and never take part in inheritance.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from ..catalog.opcode_catalog import OpcodeCatalog, default_catalog
from ..models import (
    AssignmentToken,
    DefineDirective,
    Document,
    HeaderToken,
    IncludeDirective,
    ParseWarning,
    ScopeKind,
    ScopeNode,
    Token,
    WarningKind,
)
from ..parser.value_parser import ValueParser

logger = logging.getLogger(__name__)


class DocumentBuilder:
    """
    Builds a :class:`Document` from tokens.

    Parameters
    ----------
    catalog:
        Opcode catalog used to validate assignments.  Defaults to
        :func:`~sfz_parser.catalog.opcode_catalog.default_catalog`.
    """

    def __init__(self, catalog: Optional[OpcodeCatalog] = None) -> None:
        self.catalog = catalog if catalog is not None else default_catalog()
        self._values = ValueParser()
        self._reset()

    def build(self, tokens: Iterable[Token]) -> Tuple[Document, List[ParseWarning]]:
        """
        Consume *tokens* and return the finished document and its warnings.

        Errors raised while the stream is being consumed (``TokenizeError``,
        ``StructuralError``, ``DirectiveError``) propagate unchanged and no
        partial document is returned.
        """
        self._reset()
        try:
            for token in tokens:
                if isinstance(token, HeaderToken):
                    self._open(token)
                elif isinstance(token, AssignmentToken):
                    self._assign(token)
                elif isinstance(token, DefineDirective):
                    self._document.variables[token.name] = token.value
                elif isinstance(token, IncludeDirective):
                    self._include(token)
                else:
                    raise TypeError(f"unexpected token {token!r}")
            document, warnings = self._document, self._warnings
        finally:
            self._reset()

        logger.debug(
            "Built document: %d master(s), %d group(s), %d region(s), %d warning(s)",
            len(document.masters),
            len(document.groups),
            len(document.regions),
            len(warnings),
        )
        return document, warnings

    # ------------------------------------------------------------------
    # Token handlers
    # ------------------------------------------------------------------

    def _open(self, token: HeaderToken) -> None:
        kind = token.kind
        if not kind.is_chain:
            self._open_side(token)
            return

        self._side = None
        root = self._document.global_scope

        if kind is ScopeKind.GLOBAL:
            if root.implicit:
                root.implicit = False
                root.line = token.line
            else:
                self._warn(
                    WarningKind.DUPLICATE_GLOBAL,
                    "duplicate <global> header merged into the first one",
                    token.line,
                    scope=kind,
                )
            del self._stack[1:]
            return

        while len(self._stack) > 1 and self._stack[-1].kind.rank >= kind.rank:
            self._stack.pop()

        node = ScopeNode(kind=kind, line=token.line)
        self._stack[-1].add(node)
        self._stack.append(node)
        if kind is ScopeKind.REGION:
            self._seen_region = True
        logger.debug("line %d: opened <%s> under <%s>", token.line, kind.value,
                     self._stack[-2].kind.value)

    def _open_side(self, token: HeaderToken) -> None:
        if self._stack[-1].kind is ScopeKind.REGION:
            self._stack.pop()

        if token.kind is ScopeKind.CONTROL and self._seen_region:
            self._warn(
                WarningKind.MISPLACED_CONTROL,
                "<control> header after the first <region>",
                token.line,
                scope=token.kind,
            )

        node = ScopeNode(kind=token.kind, line=token.line)
        self._document.side_scopes(token.kind).append(node)
        self._side = node
        logger.debug("line %d: opened side scope <%s>", token.line, token.kind.value)

    def _assign(self, token: AssignmentToken) -> None:
        target = self._side if self._side is not None else self._stack[-1]
        descriptor = self.catalog.lookup(token.name)

        if descriptor is None:
            value = self._values.raw_value(token.raw_value)
            self._warn(
                WarningKind.UNKNOWN_OPCODE,
                f"unknown opcode '{token.name}'",
                token.line,
                opcode=token.name,
                scope=target.kind,
            )
        else:
            value, problem = self._values.parse(descriptor, token.raw_value)
            if problem is not None:
                kind, message = problem
                self._warn(kind, message, token.line, opcode=token.name, scope=target.kind)

        target.set(token.name, value)

    def _include(self, token: IncludeDirective) -> None:
        self._document.includes.append(token)
        self._warn(
            WarningKind.UNRESOLVED_INCLUDE,
            f'#include "{token.path}" was not resolved',
            token.line,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _warn(
        self,
        kind: WarningKind,
        message: str,
        line: int,
        opcode: Optional[str] = None,
        scope: Optional[ScopeKind] = None,
    ) -> None:
        self._warnings.append(
            ParseWarning(kind=kind, message=message, line=line, opcode=opcode, scope=scope)
        )

    def _reset(self) -> None:
        self._document = Document(catalog=self.catalog)
        self._warnings: List[ParseWarning] = []
        self._stack: List[ScopeNode] = [self._document.global_scope]
        self._side: Optional[ScopeNode] = None
        self._seen_region = False


def build_document(
    tokens: Iterable[Token],
    catalog: Optional[OpcodeCatalog] = None,
) -> Tuple[Document, List[ParseWarning]]:
    """Build a :class:`Document` from *tokens* with a fresh :class:`DocumentBuilder`."""
    return DocumentBuilder(catalog).build(tokens)
