"""
Core data models for the SFZ parser.

Tokens, opcode descriptors, typed values, the scope tree and the parse
warnings, expressed as Python enums and dataclasses.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterator, List, Optional, Tuple, Union


# ---------------------------------------------------------------------------
# Scope kinds
# ---------------------------------------------------------------------------

_CHAIN_RANKS = {"global": 0, "master": 1, "group": 2, "region": 3}


class ScopeKind(Enum):
    """
    Every header the parser understands.

    ``GLOBAL < MASTER < GROUP < REGION`` form the inheritance chain; the
    remaining kinds are side scopes that never inherit and are never
    inherited from.
    """

    GLOBAL = "global"
    MASTER = "master"
    GROUP = "group"
    REGION = "region"
    CONTROL = "control"
    CURVE = "curve"
    EFFECT = "effect"
    MIDI = "midi"        # ARIA extension
    SAMPLE = "sample"    # Cakewalk extension

    @property
    def rank(self) -> Optional[int]:
        """Depth in the inheritance chain, or ``None`` for side scopes."""
        return _CHAIN_RANKS.get(self.value)

    @property
    def is_chain(self) -> bool:
        return self.rank is not None

    @classmethod
    def from_header(cls, name: str) -> Optional[ScopeKind]:
        """Map a header name (without brackets, any case) to a kind."""
        try:
            return cls(name.strip().lower())
        except ValueError:
            return None


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class HeaderToken:
    kind: ScopeKind
    line: int = 0


@dataclass(frozen=True)
class AssignmentToken:
    name: str        # lower-cased opcode name
    raw_value: str
    line: int = 0


@dataclass(frozen=True)
class DefineDirective:
    name: str        # without the leading ``$``
    value: str
    line: int = 0


@dataclass(frozen=True)
class IncludeDirective:
    path: str
    line: int = 0


Directive = Union[DefineDirective, IncludeDirective]
Token = Union[HeaderToken, AssignmentToken, DefineDirective, IncludeDirective]


# ---------------------------------------------------------------------------
# Opcode descriptors and values
# ---------------------------------------------------------------------------


class ValueKind(Enum):
    INTEGER = "integer"
    FLOAT = "float"
    PERCENTAGE = "percentage"
    NOTE = "note"            # MIDI number or pitch name
    BOOLEAN = "boolean"      # on / off
    ENUM = "enum"
    PATH = "path"
    STRING = "string"


@dataclass(frozen=True)
class OpcodeDescriptor:
    """Catalog entry describing how an opcode's value is validated."""

    name: str
    kind: ValueKind
    bounds: Optional[Tuple[float, float]] = None
    default: Optional[str] = None
    choices: FrozenSet[str] = frozenset()
    version: str = "v1"

    def __repr__(self) -> str:
        return f"OpcodeDescriptor({self.name!r}, {self.kind.value})"


@dataclass(frozen=True)
class TypedValue:
    """The validated, kind-tagged interpretation of a raw opcode value."""

    kind: ValueKind
    value: Any
    raw: str = ""

    def __repr__(self) -> str:
        return f"{self.kind.name.title()}({self.value!r})"


# ---------------------------------------------------------------------------
# Warnings
# ---------------------------------------------------------------------------


class WarningKind(Enum):
    UNKNOWN_OPCODE = "unknown_opcode"
    INVALID_VALUE = "invalid_value"
    OUT_OF_RANGE = "out_of_range"
    DUPLICATE_GLOBAL = "duplicate_global"
    UNRESOLVED_INCLUDE = "unresolved_include"
    MISPLACED_CONTROL = "misplaced_control"


@dataclass
class ParseWarning:
    """
    A recoverable problem found while building a document.

    The core never prints these; callers decide how severe they are.
    """

    kind: WarningKind
    message: str
    line: int = 0
    opcode: Optional[str] = None
    scope: Optional[ScopeKind] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "line": self.line,
            "opcode": self.opcode,
            "scope": self.scope.value if self.scope else None,
        }

    def __str__(self) -> str:
        where = f"line {self.line}" if self.line else "<unknown>"
        return f"{where}: [{self.kind.value}] {self.message}"


# ---------------------------------------------------------------------------
# Scope tree
# ---------------------------------------------------------------------------


@dataclass
class ScopeNode:
    """
    One header section and the opcodes assigned under it.

    ``children`` holds nested chain scopes in source order.  ``parent`` is a
    back-reference used for inheritance walks and is kept out of ``repr`` and
    equality to avoid recursion.
    """

    kind: ScopeKind
    opcodes: Dict[str, TypedValue] = field(default_factory=dict)
    children: List[ScopeNode] = field(default_factory=list)
    parent: Optional[ScopeNode] = field(default=None, repr=False, compare=False)
    line: int = 0
    implicit: bool = False

    def add(self, child: ScopeNode) -> None:
        child.parent = self
        self.children.append(child)

    def set(self, name: str, value: TypedValue) -> None:
        self.opcodes[name] = value

    def ancestors(self) -> Iterator[ScopeNode]:
        """Yield the parent chain, nearest first."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def walk(self) -> Iterator[ScopeNode]:
        """Depth-first, document-order traversal of this node and below."""
        yield self
        for child in self.children:
            yield from child.walk()

    @property
    def label(self) -> Optional[str]:
        value = self.opcodes.get(f"{self.kind.value}_label")
        return value.value if value is not None else None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "kind": self.kind.value,
            "line": self.line,
            "opcodes": {name: v.value for name, v in self.opcodes.items()},
        }
        if self.implicit:
            data["implicit"] = True
        if self.children:
            data["children"] = [c.to_dict() for c in self.children]
        return data

    def __repr__(self) -> str:
        return (
            f"ScopeNode(kind={self.kind.value!r}, opcodes={len(self.opcodes)}, "
            f"children={len(self.children)})"
        )


@dataclass
class Document:
    """
    A parsed SFZ instrument.

    ``global_scope`` is always present: it is the implicit root until a
    ``<global>`` header is declared.  Masters, groups and regions hang below
    it; side scopes are kept in their own flat sequences.

    ``base_dir`` is the directory of the parsed file, when there is one;
    :meth:`sample_path` anchors relative sample paths to it.
    """

    global_scope: ScopeNode = field(
        default_factory=lambda: ScopeNode(kind=ScopeKind.GLOBAL, implicit=True)
    )
    controls: List[ScopeNode] = field(default_factory=list)
    curves: List[ScopeNode] = field(default_factory=list)
    effects: List[ScopeNode] = field(default_factory=list)
    midis: List[ScopeNode] = field(default_factory=list)
    samples: List[ScopeNode] = field(default_factory=list)
    includes: List[IncludeDirective] = field(default_factory=list)
    variables: Dict[str, str] = field(default_factory=dict)
    # OpcodeCatalog the document was validated against; None means the standard one
    catalog: Any = field(default=None, repr=False, compare=False)
    base_dir: str = ""

    # ------------------------------------------------------------------
    # Tree views
    # ------------------------------------------------------------------

    @property
    def has_global(self) -> bool:
        return not self.global_scope.implicit

    def _of_kind(self, kind: ScopeKind) -> List[ScopeNode]:
        return [n for n in self.global_scope.walk() if n.kind is kind]

    @property
    def masters(self) -> List[ScopeNode]:
        return self._of_kind(ScopeKind.MASTER)

    @property
    def groups(self) -> List[ScopeNode]:
        return self._of_kind(ScopeKind.GROUP)

    @property
    def regions(self) -> List[ScopeNode]:
        return self._of_kind(ScopeKind.REGION)

    def side_scopes(self, kind: ScopeKind) -> List[ScopeNode]:
        """Return the sequence that stores side scopes of *kind*."""
        return {
            ScopeKind.CONTROL: self.controls,
            ScopeKind.CURVE: self.curves,
            ScopeKind.EFFECT: self.effects,
            ScopeKind.MIDI: self.midis,
            ScopeKind.SAMPLE: self.samples,
        }[kind]

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(self, region: ScopeNode, opcode_name: str) -> Optional[TypedValue]:
        """Effective value of *opcode_name* for *region* (see :mod:`resolver`)."""
        from .pipeline.resolver import resolve  # local import avoids circular ref

        return resolve(self, region, opcode_name)

    def effective_opcodes(self, region: ScopeNode) -> Dict[str, TypedValue]:
        from .pipeline.resolver import effective_opcodes

        return effective_opcodes(region)

    @property
    def default_path(self) -> str:
        """The last ``default_path`` set in a ``<control>`` section, or ``""``."""
        path = ""
        for control in self.controls:
            value = control.opcodes.get("default_path")
            if value is not None:
                path = str(value.value)
        return path

    def sample_path(self, region: ScopeNode) -> Optional[str]:
        """
        ``default_path`` joined with the region's resolved ``sample``.

        Purely textual; the file is not checked for existence.  Relative
        results are prefixed with ``base_dir`` when it is set.
        """
        sample = self.resolve(region, "sample")
        if sample is None:
            return None
        name = str(sample.value).replace("\\", "/")
        if name.startswith("*") or name.startswith("/"):
            # Built-in generators (*sine, *noise …) and absolute paths
            return name
        path = self.default_path + name
        if not self.base_dir or path.startswith("/"):
            return path
        return f"{self.base_dir.rstrip('/')}/{path}"

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "global": self.global_scope.to_dict(),
            "controls": [c.to_dict() for c in self.controls],
            "curves": [c.to_dict() for c in self.curves],
            "effects": [c.to_dict() for c in self.effects],
            "midis": [c.to_dict() for c in self.midis],
            "samples": [c.to_dict() for c in self.samples],
            "variables": dict(self.variables),
            "includes": [i.path for i in self.includes],
        }

    def __repr__(self) -> str:
        return (
            f"Document(masters={len(self.masters)}, groups={len(self.groups)}, "
            f"regions={len(self.regions)})"
        )


# ---------------------------------------------------------------------------
# Parse result
# ---------------------------------------------------------------------------


@dataclass
class ParseResult:
    """What :class:`~sfz_parser.pipeline.sfz_analysis.SfzAnalysis` returns."""

    document: Document
    warnings: List[ParseWarning] = field(default_factory=list)
    source: str = "<inline>"

    @property
    def ok(self) -> bool:
        """True when the parse produced no warnings."""
        return not self.warnings

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "document": self.document.to_dict(),
            "warnings": [w.to_dict() for w in self.warnings],
        }
