"""
Output fragments shared by every generator.

A fragment is either a header-only declaration or a header/source pair.
Generators only ever append fragments to the typed buckets of
``GeneratedCppQObjectBlocks``; order inside a bucket becomes declaration
order in the emitted code.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Set


class FragmentKind(Enum):
    HEADER_ONLY = "header_only"
    PAIR = "pair"


@dataclass(frozen=True)
class CppFragment:
    """Tagged header-only / header+source value."""

    kind: FragmentKind
    header: str
    source: Optional[str] = None

    def __post_init__(self):
        if self.kind == FragmentKind.PAIR and self.source is None:
            raise ValueError("A pair fragment needs source text")
        if self.kind == FragmentKind.HEADER_ONLY and self.source is not None:
            raise ValueError("A header-only fragment has no source text")

    @classmethod
    def header_only(cls, header: str) -> "CppFragment":
        return cls(FragmentKind.HEADER_ONLY, header)

    @classmethod
    def pair(cls, header: str, source: str) -> "CppFragment":
        return cls(FragmentKind.PAIR, header, source)

    @property
    def is_pair(self) -> bool:
        return self.kind == FragmentKind.PAIR


@dataclass(frozen=True)
class CppNamedType:
    """A parameter name with its resolved C++ type."""

    ident: str
    ty: str

    def __str__(self) -> str:
        return f"{self.ty} {self.ident}"


@dataclass
class GeneratedCppQObjectBlocks:
    """Fragments for one object, grouped by where they are emitted."""

    forward_declares: List[str] = field(default_factory=list)
    members: List[str] = field(default_factory=list)
    metaobjects: List[str] = field(default_factory=list)
    methods: List[CppFragment] = field(default_factory=list)
    private_methods: List[CppFragment] = field(default_factory=list)
    deconstructors: List[str] = field(default_factory=list)
    includes: Set[str] = field(default_factory=set)

    def append(self, other: "GeneratedCppQObjectBlocks") -> None:
        """Append every bucket of ``other`` after the existing entries."""
        self.forward_declares.extend(other.forward_declares)
        self.members.extend(other.members)
        self.metaobjects.extend(other.metaobjects)
        self.methods.extend(other.methods)
        self.private_methods.extend(other.private_methods)
        self.deconstructors.extend(other.deconstructors)
        self.includes.update(other.includes)

    def is_empty(self) -> bool:
        return not (
            self.forward_declares
            or self.members
            or self.metaobjects
            or self.methods
            or self.private_methods
            or self.deconstructors
            or self.includes
        )


def join_arguments(arguments: List[CppNamedType]) -> str:
    """Render ``T0 arg0, T1 arg1`` for a declaration."""
    return ", ".join(str(argument) for argument in arguments)
