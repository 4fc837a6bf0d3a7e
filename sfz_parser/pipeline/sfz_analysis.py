"""
SfzAnalysis
===========

Full SFZ parsing pipeline.

Stages:

1. :class:`~sfz_parser.pipeline.include_loader.IncludeLoader`
   – Flatten ``#include`` directives (files only).
2. :class:`~sfz_parser.passes.comments.StripCommentsPass`
   – Remove ``//`` and ``/* */`` comments (run by the tokenizer).
3. :class:`~sfz_parser.passes.directives.DirectiveExpansionPass`
   – Record ``#define`` variables and substitute ``$NAME`` references
   (run by the tokenizer).
4. :class:`~sfz_parser.pipeline.document_builder.DocumentBuilder`
   – Consume the :class:`~sfz_parser.parser.tokenizer.Tokenizer` stream,
   build the scope tree and validate every opcode.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from ..catalog.opcode_catalog import OpcodeCatalog
from ..errors import StrictModeError
from ..models import ParseResult
from ..parser.tokenizer import Tokenizer
from .document_builder import DocumentBuilder
from .include_loader import IncludeLoader

logger = logging.getLogger(__name__)


class SfzAnalysis:
    """
    High-level facade for parsing SFZ instruments.

    Parameters
    ----------
    include_paths:
        Extra directories searched for ``#include`` targets when parsing
        files.
    strict:
        Raise :class:`~sfz_parser.errors.StrictModeError` instead of
        returning when a parse produced any warning.
    catalog:
        Opcode catalog; defaults to the standard one.
    """

    def __init__(
        self,
        include_paths: Iterable[Union[str, Path]] = (),
        strict: bool = False,
        catalog: Optional[OpcodeCatalog] = None,
    ) -> None:
        self.include_paths = list(include_paths)
        self.strict = strict
        self.catalog = catalog
        self.loader = IncludeLoader(search_paths=self.include_paths)

    # ------------------------------------------------------------------
    # Primary API
    # ------------------------------------------------------------------

    def parse_file(self, file_path: Union[str, Path]) -> ParseResult:
        """
        Parse an SFZ **file**, flattening its includes first.

        Raises
        ------
        IncludeError
            Missing file or include, include cycle, depth limit.
        SfzError
            Any fatal lexing / structural / directive error.
        """
        logger.info("Parsing file: %s", file_path)
        text = self.loader.load(file_path)
        base_dir = Path(file_path).resolve().parent.as_posix()
        return self._run_pipeline(text, str(file_path), base_dir)

    def parse_text(self, text: str, source_name: str = "<inline>") -> ParseResult:
        """
        Parse SFZ source supplied as a **string**.

        Includes are not followed; each one is reported as an
        ``UNRESOLVED_INCLUDE`` warning.
        """
        return self._run_pipeline(text, source_name)

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def _run_pipeline(self, text: str, source_name: str, base_dir: str = "") -> ParseResult:
        # Stages 2 - 4: comments and #define are handled inside the tokenizer
        tokens = Tokenizer().tokenize(text)
        document, warnings = DocumentBuilder(self.catalog).build(tokens)
        document.base_dir = base_dir

        logger.info(
            "%s: %d region(s), %d warning(s)",
            source_name,
            len(document.regions),
            len(warnings),
        )
        if self.strict and warnings:
            raise StrictModeError(warnings)
        return ParseResult(document=document, warnings=warnings, source=source_name)
