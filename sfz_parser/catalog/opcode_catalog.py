"""
OpcodeCatalog
=============

Read-only lookup table from opcode names to
:class:`~sfz_parser.models.OpcodeDescriptor`.

Real opcode names carry numeric parameters (``hicc64``, ``eq2_freq``,
``lfo1_eq2gain_oncc3``).  The catalog stores one *canonical* entry per
family and maps a concrete name onto it by replacing the parameters with
``N``, ``X`` and ``Y`` in order of appearance (``NN`` for the ``var``
family)::

    hicc64              ->  hiccN
    lfo1_eq2gain_oncc3  ->  lfoN_eqXgain_onccY
    var01_oncc5         ->  varNN_onccX

Digits that are part of an opcode's own name are left alone: ``fil2_``,
``_vel2``, ``effect1`` … ``effect4``, ``cutoff2``, ``resonance2`` and ``md5``.
"""
from __future__ import annotations

import functools
import re
from types import MappingProxyType
from typing import Iterable, Iterator, List, Optional, Tuple

from ..models import OpcodeDescriptor
from .opcodes import PREFIX_OPCODES, STANDARD_OPCODES

_DIGITS_RE = re.compile(r"\d+")
_NAME_DIGITS_RE = re.compile(r"fil2_|_vel2|effect[1-4]|cutoff2|resonance2|md5")
_PARAM_LETTERS = ("N", "X", "Y")


def canonical_name(name: str) -> Tuple[str, List[int]]:
    """
    Replace the numeric parameters of *name* by their placeholder letters.

    Returns
    -------
    Tuple[str, List[int]]
        The canonical name and the parameter values in order.  Names with
        more than three parameters keep the extra digits verbatim.
    """
    name = name.lower()
    protected = [m.span() for m in _NAME_DIGITS_RE.finditer(name)]
    params: List[int] = []
    parts: List[str] = []
    last = 0

    for match in _DIGITS_RE.finditer(name):
        start = match.start()
        if any(lo <= start < hi for lo, hi in protected):
            continue
        if len(params) == len(_PARAM_LETTERS):
            break
        parts.append(name[last:start])
        if not params and name.startswith("var"):
            parts.append("NN")
        else:
            parts.append(_PARAM_LETTERS[len(params)])
        params.append(int(match.group()))
        last = match.end()

    parts.append(name[last:])
    return "".join(parts), params


class OpcodeCatalog:
    """
    Immutable opcode lookup.

    Parameters
    ----------
    descriptors:
        Entries keyed by their canonical name.
    prefixes:
        Entries whose ``name`` is a prefix matching a whole family of opcodes
        (``hint_*``).
    """

    def __init__(
        self,
        descriptors: Iterable[OpcodeDescriptor],
        prefixes: Iterable[OpcodeDescriptor] = (),
    ) -> None:
        self._by_name = MappingProxyType({d.name: d for d in descriptors})
        self._prefixes: Tuple[OpcodeDescriptor, ...] = tuple(prefixes)

    def lookup(self, name: str) -> Optional[OpcodeDescriptor]:
        """
        Find the descriptor for the concrete opcode *name*.

        Returns ``None`` when the opcode is unknown.  Canonical names
        (``hiccN``) are accepted as well.
        """
        descriptor = self._by_name.get(name)
        if descriptor is not None:
            return descriptor

        name = name.lower()
        descriptor = self._by_name.get(name)
        if descriptor is not None:
            return descriptor

        canonical, _ = canonical_name(name)
        descriptor = self._by_name.get(canonical)
        if descriptor is not None:
            return descriptor

        for family in self._prefixes:
            if name.startswith(family.name):
                return family
        return None

    def canonical_name(self, name: str) -> Tuple[str, List[int]]:
        return canonical_name(name)

    def names(self) -> Iterator[str]:
        return iter(self._by_name)

    def __iter__(self) -> Iterator[OpcodeDescriptor]:
        return iter(self._by_name.values())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.lookup(name) is not None

    def __len__(self) -> int:
        return len(self._by_name)

    def __repr__(self) -> str:
        return f"OpcodeCatalog({len(self)} opcodes)"


@functools.lru_cache(maxsize=None)
def default_catalog() -> OpcodeCatalog:
    """The process-wide catalog of standard SFZ opcodes, built once."""
    return OpcodeCatalog(STANDARD_OPCODES, PREFIX_OPCODES)
