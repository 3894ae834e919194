"""
Type-Name Resolver.

``TypeNames`` maps business-logic identifiers to their namespaced C++
names. It is built once per generation run and passed explicitly into
every generator call; nothing here is module-level mutable state.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, TYPE_CHECKING

from ..core.generator import TypeResolutionError
from ..core.naming import qualify
from ..core.types import TypeKind, TypeRef
from ...logging_config import get_logger

if TYPE_CHECKING:
    from ..core.model import ParsedModel, Span

logger = get_logger(__name__)


# Fixed spellings of the bridge's primitive types
PRIMITIVE_TYPES: Mapping[str, str] = MappingProxyType({
    "i8": "std::int8_t",
    "i16": "std::int16_t",
    "i32": "std::int32_t",
    "i64": "std::int64_t",
    "u8": "std::uint8_t",
    "u16": "std::uint16_t",
    "u32": "std::uint32_t",
    "u64": "std::uint64_t",
    "isize": "rust::isize",
    "usize": "std::size_t",
    "f32": "float",
    "f64": "double",
    "bool": "bool",
    "String": "rust::String",
    "str": "rust::Str",
})

# Single-argument generic wrappers
GENERIC_TYPES: Mapping[str, str] = MappingProxyType({
    "UniquePtr": "std::unique_ptr",
    "SharedPtr": "std::shared_ptr",
    "WeakPtr": "std::weak_ptr",
    "Box": "rust::Box",
    "Vec": "rust::Vec",
    "CxxVector": "std::vector",
})

# Leading path segments that name the bridge module or a standard crate;
# a qualified path must start with one of these or spell a known C++ name
BRIDGE_PATH_PREFIXES = frozenset({
    "crate",
    "self",
    "super",
    "ffi",
    "qobject",
    "std",
    "core",
    "alloc",
    "cxx",
    "cxx_qt",
    "cxx_qt_lib",
})

# Framework value types every bridge can name without declaring them
QT_BUILTIN_TYPES = (
    "QObject",
    "QString",
    "QByteArray",
    "QColor",
    "QDate",
    "QDateTime",
    "QTime",
    "QPoint",
    "QPointF",
    "QSize",
    "QSizeF",
    "QRect",
    "QRectF",
    "QUrl",
    "QVariant",
    "QList",
    "QVector",
    "QHash",
    "QMap",
    "QSet",
    "QModelIndex",
    "QStringList",
)


@dataclass(frozen=True)
class TypeName:
    """C++ name of a business-logic identifier."""

    cxx_name: str
    namespace: str = ""

    @property
    def qualified(self) -> str:
        return qualify(self.namespace, self.cxx_name)


class TypeNames:
    """Read-only identifier to C++ name table for one generation run."""

    def __init__(self, entries: Optional[Mapping[str, TypeName]] = None):
        self._entries = MappingProxyType(dict(entries or {}))

    @classmethod
    def builtins(cls) -> "TypeNames":
        """Table holding only the framework builtins."""
        return cls({name: TypeName(name) for name in QT_BUILTIN_TYPES})

    @classmethod
    def from_model(cls, model: "ParsedModel") -> "TypeNames":
        """
        Build the table for a model.

        Objects, their business-logic types, enums, extern objects and the
        ``types`` aliases are added on top of the builtins; later
        declarations shadow earlier ones.
        """
        entries: Dict[str, TypeName] = dict(cls.builtins()._entries)

        for qobject in model.qobjects:
            entries[qobject.name] = TypeName(qobject.name, qobject.namespace)
            entries[qobject.rust_type] = TypeName(qobject.rust_type, qobject.namespace)

        owners = {q.name: q for q in model.qobjects}
        for qenum in model.qenums:
            owner = owners.get(qenum.qobject) if qenum.qobject else None
            if owner is not None:
                entries[qenum.name] = TypeName(
                    f"{owner.name}::{qenum.name}", owner.namespace
                )
            else:
                entries[qenum.name] = TypeName(qenum.name, qenum.namespace)

        for block in model.extern_cxxqt_blocks:
            for extern in block.qobjects:
                entries[extern.name] = TypeName(
                    extern.cxx_name or extern.name, extern.namespace
                )

        for ident, target in model.type_aliases.items():
            namespace, _, cxx_name = target.rpartition("::")
            entries[ident] = TypeName(cxx_name, namespace)

        logger.debug("Type name table holds %d entries", len(entries))
        return cls(entries)

    def lookup(self, ident: str) -> Optional[TypeName]:
        return self._entries.get(ident)

    def cxx_qualified(self, ident: str, span: Optional["Span"] = None) -> str:
        """Qualified C++ name of a known identifier.

        Raises:
            TypeResolutionError: If the identifier is unknown
        """
        entry = self._entries.get(ident)
        if entry is None:
            raise TypeResolutionError(f"Unknown type '{ident}'", span)
        return entry.qualified

    def __contains__(self, ident: object) -> bool:
        return ident in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


def resolve_cpp_type(ty: TypeRef, type_names: TypeNames,
                     span: Optional["Span"] = None) -> str:
    """
    Spell a parameter type in C++.

    Args:
        ty: Parsed business-logic type
        type_names: Identifier table of the current run
        span: Location reported when the type is unknown

    Returns:
        C++ spelling, e.g. ``std::int32_t`` or ``QColor const&``

    Raises:
        TypeResolutionError: If any part of the type has no C++ spelling
    """
    kind = ty.kind

    if kind == TypeKind.TUPLE:
        if ty.is_unit:
            return "void"
        raise TypeResolutionError(f"Tuple type '{ty}' has no C++ spelling", span)

    if kind == TypeKind.REFERENCE:
        inner = ty.inner
        if inner.kind == TypeKind.SLICE:
            element = resolve_cpp_type(inner.inner, type_names, span)
            if ty.mutable:
                return f"rust::Slice<{element}>"
            return f"rust::Slice<{element} const>"
        if inner.is_path("str", 0) and not ty.mutable:
            return "rust::Str"
        resolved = resolve_cpp_type(inner, type_names, span)
        return f"{resolved}&" if ty.mutable else f"{resolved} const&"

    if kind == TypeKind.POINTER:
        resolved = resolve_cpp_type(ty.inner, type_names, span)
        return f"{resolved}*" if ty.mutable else f"{resolved} const*"

    if kind == TypeKind.ARRAY:
        element = resolve_cpp_type(ty.inner, type_names, span)
        return f"std::array<{element}, {ty.length}>"

    if kind == TypeKind.FUNCTION:
        returns = "void"
        if ty.inner is not None:
            returns = resolve_cpp_type(ty.inner, type_names, span)
        params = [resolve_cpp_type(arg, type_names, span) for arg in ty.args]
        return "rust::Fn<" + ", ".join([returns] + params) + ">"

    if kind == TypeKind.SLICE:
        raise TypeResolutionError(
            f"Unsized slice '{ty}' must be behind a reference", span
        )

    return _resolve_path(ty, type_names, span)


def _has_known_prefix(ty: TypeRef, type_names: TypeNames) -> bool:
    if len(ty.path) == 1 or ty.path[0] in BRIDGE_PATH_PREFIXES:
        return True
    entry = type_names.lookup(ty.ident)
    return entry is not None and entry.namespace == "::".join(ty.path[:-1])


def _resolve_path(ty: TypeRef, type_names: TypeNames, span: Optional["Span"]) -> str:
    if not _has_known_prefix(ty, type_names):
        prefix = "::".join(ty.path[:-1])
        raise TypeResolutionError(f"Unknown path '{prefix}' in type '{ty}'", span)

    ident = ty.ident

    if not ty.args and ident in PRIMITIVE_TYPES:
        return PRIMITIVE_TYPES[ident]

    if ty.is_path("Pin", 1):
        return resolve_cpp_type(ty.args[0], type_names, span)

    if ident in GENERIC_TYPES and len(ty.args) == 1:
        inner = resolve_cpp_type(ty.args[0], type_names, span)
        return f"{GENERIC_TYPES[ident]}<{inner}>"

    entry = type_names.lookup(ident)
    if entry is None:
        raise TypeResolutionError(f"Unknown type '{ty}'", span)

    if ty.args:
        args = ", ".join(resolve_cpp_type(arg, type_names, span) for arg in ty.args)
        return f"{entry.qualified}<{args}>"
    return entry.qualified


def resolve_cpp_return_type(ty: Optional[TypeRef], type_names: TypeNames,
                            span: Optional["Span"] = None) -> str:
    """Spell a return type; a missing type is ``void`` and ``Result<T>`` is ``T``."""
    if ty is None:
        return "void"
    if ty.is_path("Result") and ty.args:
        return resolve_cpp_type(ty.args[0], type_names, span)
    return resolve_cpp_type(ty, type_names, span)
