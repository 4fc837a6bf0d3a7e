"""
IncludeLoader
=============

Flattens ``#include "file.sfz"`` directives by splicing the included text into
the including file, recursively.  The parser core never touches the file
system; this loader runs before it.

Include paths are resolved relative to the including file first and then
against each configured search path.  Backslashes are treated as ``/`` and
``$NAME`` variables defined so far (in document order, across files) are
substituted into the path.

Every include edge is recorded in :attr:`IncludeLoader.include_graph`, a
:class:`networkx.DiGraph` keyed by resolved file path.  An edge that closes a
cycle raises :class:`~sfz_parser.errors.IncludeError`; including the same
file from two different parents is allowed.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set, Union

import networkx as nx

from ..errors import IncludeError
from ..models import DefineDirective
from ..passes.comments import StripCommentsPass
from ..passes.directives import is_directive, parse_directive, substitute

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class IncludeLoader:
    """
    Reads an SFZ file and inlines its includes.

    Parameters
    ----------
    search_paths:
        Extra directories searched, in order, when an include is not found
        next to the including file.
    max_depth:
        Maximum include nesting.  Deeper nesting raises ``IncludeError``.
    """

    def __init__(
        self,
        search_paths: Iterable[PathLike] = (),
        max_depth: int = 32,
    ) -> None:
        self.search_paths: List[Path] = [Path(p) for p in search_paths]
        self.max_depth = max_depth
        self.include_graph = nx.DiGraph()
        self._variables: Dict[str, str] = {}
        self._comments = StripCommentsPass()

    # ------------------------------------------------------------------
    # Primary API
    # ------------------------------------------------------------------

    def load(self, path: PathLike) -> str:
        """
        Read *path* and return its text with every include flattened.

        Raises
        ------
        IncludeError
            The file or one of its includes is missing, an include cycle was
            found, or the nesting exceeds ``max_depth``.
        """
        source = Path(path)
        if not source.is_file():
            raise IncludeError(f"file not found: {source}")
        source = source.resolve()
        logger.info("Loading %s", source)

        self._variables = {}
        self.include_graph.add_node(str(source))
        return self._flatten(self._read(source), str(source), source.parent, [str(source)])

    def load_text(
        self,
        text: str,
        base_dir: PathLike = ".",
        source_name: str = "<inline>",
    ) -> str:
        """
        Flatten the includes of an in-memory root document.

        Parameters
        ----------
        text:
            Root SFZ source.
        base_dir:
            Directory that relative include paths are resolved against.
        source_name:
            Node name of the root in :attr:`include_graph`.
        """
        self._variables = {}
        self.include_graph.add_node(source_name)
        return self._flatten(text, source_name, Path(base_dir), [source_name])

    def all_includes(self, path: PathLike) -> Set[str]:
        """Every file reachable through includes from *path* (transitively)."""
        node = str(path) if str(path) in self.include_graph else str(Path(path).resolve())
        if node not in self.include_graph:
            return set()
        return set(nx.descendants(self.include_graph, node))

    @property
    def variables(self) -> Dict[str, str]:
        """``#define`` table as seen at the end of the last load."""
        return dict(self._variables)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _flatten(self, text: str, source: str, base_dir: Path, chain: List[str]) -> str:
        out: List[str] = []
        for line_no, line in enumerate(self._comments.run(text).splitlines(), start=1):
            if not is_directive(line):
                out.append(line)
                continue

            directive = parse_directive(line, line_no)
            if isinstance(directive, DefineDirective):
                self._variables[directive.name] = substitute(directive.value, self._variables)
                out.append(line)
                continue

            include_path = substitute(directive.path, self._variables).replace("\\", "/")
            target = self._resolve(include_path, base_dir)
            if target is None:
                raise IncludeError(
                    f'included file not found: "{include_path}" (from {source})',
                    line_no,
                    chain=chain,
                )
            self._add_edge(source, str(target), line_no, chain)

            if len(chain) > self.max_depth:
                raise IncludeError(
                    f"include depth limit ({self.max_depth}) exceeded at {target}",
                    line_no,
                    chain=chain + [str(target)],
                )

            logger.info("Including %s (depth=%d)", target, len(chain))
            out.append(
                self._flatten(self._read(target), str(target), target.parent,
                              chain + [str(target)])
            )
        return "\n".join(out)

    def _add_edge(self, source: str, target: str, line_no: int, chain: List[str]) -> None:
        self.include_graph.add_edge(source, target)
        try:
            cycle = nx.find_cycle(self.include_graph, source=target)
        except nx.NetworkXNoCycle:
            return
        self.include_graph.remove_edge(source, target)
        path = [u for u, _ in cycle] + [cycle[0][0]]
        raise IncludeError(
            "include cycle: " + " -> ".join(Path(p).name for p in path),
            line_no,
            chain=path,
        )

    def _resolve(self, include_path: str, base_dir: Path) -> Optional[Path]:
        candidate = Path(include_path)
        if candidate.is_absolute():
            return candidate.resolve() if candidate.is_file() else None

        for directory in [base_dir, *self.search_paths]:
            candidate = directory / include_path
            if candidate.is_file():
                return candidate.resolve()

        logger.debug("Could not resolve include %r from %s", include_path, base_dir)
        return None

    @staticmethod
    def _read(path: Path) -> str:
        return path.read_text(encoding="utf-8", errors="replace")
