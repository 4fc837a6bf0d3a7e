"""
SFZ Parser
==========

A Python parser for the SFZ instrument-description format.  It lexes the
plain-text ``<header> key=value`` syntax, expands ``#define`` variables,
validates every opcode against the standard opcode catalog and builds a
``<global> / <master> / <group> / <region>`` scope tree in which each region
resolves its inherited parameters on demand.

Quick start
-----------
>>> from sfz_parser import SfzAnalysis
>>> result = SfzAnalysis(include_paths=["./shared"]).parse_file("piano.sfz")
>>> for region in result.document.regions:
...     print(result.document.resolve(region, "sample"),
...           result.document.resolve(region, "lokey"))

The core can also be driven stage by stage:

>>> from sfz_parser import build_document, resolve, tokenize
>>> document, warnings = build_document(tokenize("<region> sample=a.wav"))
>>> resolve(document, document.regions[0], "pitch_keycenter")
Note(60)
"""

from .catalog.opcode_catalog import OpcodeCatalog, canonical_name, default_catalog
from .errors import (
    DirectiveError,
    IncludeError,
    SfzError,
    StrictModeError,
    StructuralError,
    TokenizeError,
)
from .models import (
    AssignmentToken,
    DefineDirective,
    Document,
    HeaderToken,
    IncludeDirective,
    OpcodeDescriptor,
    ParseResult,
    ParseWarning,
    ScopeKind,
    ScopeNode,
    TypedValue,
    ValueKind,
    WarningKind,
)
from .parser.tokenizer import Tokenizer, tokenize
from .passes.directives import expand_directives
from .pipeline.document_builder import DocumentBuilder, build_document
from .pipeline.include_loader import IncludeLoader
from .pipeline.resolver import effective_opcodes, resolve
from .pipeline.sfz_analysis import SfzAnalysis

__version__ = "0.1.0"
__all__ = [
    "AssignmentToken",
    "DefineDirective",
    "DirectiveError",
    "Document",
    "DocumentBuilder",
    "HeaderToken",
    "IncludeDirective",
    "IncludeError",
    "IncludeLoader",
    "OpcodeCatalog",
    "OpcodeDescriptor",
    "ParseResult",
    "ParseWarning",
    "ScopeKind",
    "ScopeNode",
    "SfzAnalysis",
    "SfzError",
    "StrictModeError",
    "StructuralError",
    "TokenizeError",
    "Tokenizer",
    "TypedValue",
    "ValueKind",
    "WarningKind",
    "build_document",
    "canonical_name",
    "default_catalog",
    "effective_opcodes",
    "expand_directives",
    "resolve",
    "tokenize",
]
