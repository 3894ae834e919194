"""
Structured input model for code generation.

Mirrors what the parser front end produces from an annotated bridge module:
objects, their constructors and properties, free-standing methods and
signals (attached to objects later by their receiver), enums, namespaces
and extern framework objects. ``ParsedModel.from_dict`` converts the
front end's JSON output into this normalized form.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .generator import ModelError
from .types import TypeRef, is_mutable_receiver, parse_type, receiver_ident


@dataclass(frozen=True)
class Span:
    """Source location of a declaration."""

    file: str = "<bridge>"
    line: int = 0
    column: int = 0

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


@dataclass(frozen=True)
class ParsedParameter:
    """One parameter of a signature.

    ``name`` is set when the parameter binds a single identifier; any other
    pattern (tuple, struct, wildcard) is kept verbatim in ``pattern``.
    """

    ty: TypeRef
    name: Optional[str] = None
    pattern: Optional[str] = None
    span: Optional[Span] = None

    @property
    def is_receiver(self) -> bool:
        return self.name == "self"

    @property
    def is_ident(self) -> bool:
        return self.name is not None and self.pattern is None


@dataclass(frozen=True)
class ParsedSignature:
    """A function signature as declared on the business-logic side."""

    name: str
    parameters: Tuple[ParsedParameter, ...] = ()
    returns: Optional[TypeRef] = None
    cxx_name: Optional[str] = None
    span: Optional[Span] = None

    @property
    def receiver(self) -> Optional[ParsedParameter]:
        if self.parameters and self.parameters[0].is_receiver:
            return self.parameters[0]
        return None

    @property
    def self_ident(self) -> Optional[str]:
        """Name of the object the receiver refers to."""
        receiver = self.receiver
        return receiver_ident(receiver.ty) if receiver else None

    @property
    def is_mutable(self) -> bool:
        receiver = self.receiver
        return receiver is not None and is_mutable_receiver(receiver.ty)


@dataclass(frozen=True)
class ParsedMethod:
    """A method implemented by the business object and exposed to C++."""

    signature: ParsedSignature
    is_qinvokable: bool = False

    @property
    def self_ident(self) -> Optional[str]:
        return self.signature.self_ident


@dataclass(frozen=True)
class ParsedSignal:
    """A signal declared on an object (or inherited from its base class)."""

    signature: ParsedSignature
    inherit: bool = False

    @property
    def self_ident(self) -> Optional[str]:
        return self.signature.self_ident


@dataclass(frozen=True)
class ParsedInheritedMethod:
    """A base-class method the business object wants to call."""

    signature: ParsedSignature

    @property
    def self_ident(self) -> Optional[str]:
        return self.signature.self_ident


@dataclass(frozen=True)
class ParsedProperty:
    """A ``Q_PROPERTY`` backed by a field of the business object."""

    name: str
    ty: TypeRef
    span: Optional[Span] = None


@dataclass(frozen=True)
class ParsedConstructor:
    """One declared constructor.

    The four type lists are independent; how public arguments map onto the
    other three is decided by business-logic code named by ``imp``.
    """

    arguments: Tuple[TypeRef, ...] = ()
    base_arguments: Tuple[TypeRef, ...] = ()
    new_arguments: Tuple[TypeRef, ...] = ()
    initialize_arguments: Tuple[TypeRef, ...] = ()
    imp: str = ""
    span: Optional[Span] = None


@dataclass(frozen=True)
class EnumVariant:
    name: str
    value: Optional[int] = None


@dataclass(frozen=True)
class ParsedQEnum:
    """An enum registered with the meta-object system."""

    name: str
    variants: Tuple[EnumVariant, ...]
    namespace: str = ""
    qobject: Optional[str] = None
    repr: Optional[TypeRef] = None
    span: Optional[Span] = None


@dataclass(frozen=True)
class ParsedQObject:
    """One declared object type."""

    name: str
    rust_type: str
    namespace: str = ""
    base_class: Optional[str] = None
    threading: bool = False
    locking: bool = True
    properties: Tuple[ParsedProperty, ...] = ()
    constructors: Tuple[ParsedConstructor, ...] = ()
    span: Optional[Span] = None


@dataclass(frozen=True)
class ParsedExternQObject:
    """A framework object declared in C++ and only consumed from Rust."""

    name: str
    cxx_name: Optional[str] = None
    namespace: str = ""
    span: Optional[Span] = None


@dataclass(frozen=True)
class ParsedExternBlock:
    """An ``extern "C++Qt"`` block: foreign objects and their signals."""

    namespace: str = ""
    qobjects: Tuple[ParsedExternQObject, ...] = ()
    signals: Tuple[ParsedSignal, ...] = ()
    span: Optional[Span] = None


@dataclass
class ParsedModel:
    """Everything the front end extracted from one bridge module."""

    cxx_file_stem: str
    namespace: str = ""
    qobjects: List[ParsedQObject] = field(default_factory=list)
    methods: List[ParsedMethod] = field(default_factory=list)
    signals: List[ParsedSignal] = field(default_factory=list)
    inherited_methods: List[ParsedInheritedMethod] = field(default_factory=list)
    qenums: List[ParsedQEnum] = field(default_factory=list)
    qnamespaces: List[str] = field(default_factory=list)
    extern_cxxqt_blocks: List[ParsedExternBlock] = field(default_factory=list)
    type_aliases: Dict[str, str] = field(default_factory=dict)
    includes: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source: str = "<bridge>") -> "ParsedModel":
        """
        Convert the front end's JSON output into a ParsedModel.

        Args:
            data: Decoded JSON document
            source: File name used for spans lacking one

        Returns:
            Normalized model

        Raises:
            ModelError: If required keys are missing or have the wrong shape
        """
        if not isinstance(data, dict):
            raise ModelError("Bridge description must be a JSON object")

        loader = _Loader(source)
        namespace = loader.text(data, "namespace", "bridge", default="")

        if "cxx_file_stem" not in data:
            raise ModelError("Bridge description is missing 'cxx_file_stem'")
        stem = loader.text(data, "cxx_file_stem", "bridge")

        return cls(
            cxx_file_stem=stem,
            namespace=namespace,
            qobjects=[
                loader.qobject(item, namespace)
                for item in loader.items(data, "qobjects", "bridge")
            ],
            methods=[
                loader.method(item) for item in loader.items(data, "methods", "bridge")
            ],
            signals=[
                loader.signal(item) for item in loader.items(data, "signals", "bridge")
            ],
            inherited_methods=[
                ParsedInheritedMethod(loader.signature(item))
                for item in loader.items(data, "inherited_methods", "bridge")
            ],
            qenums=[
                loader.qenum(item, namespace)
                for item in loader.items(data, "qenums", "bridge")
            ],
            qnamespaces=loader.strings(data, "qnamespaces", "bridge"),
            extern_cxxqt_blocks=[
                loader.extern_block(item, namespace)
                for item in loader.items(data, "extern_cxxqt_blocks", "bridge")
            ],
            type_aliases=loader.aliases(data.get("types", {})),
            includes=loader.strings(data, "includes", "bridge"),
        )


class _Loader:
    """Field-by-field conversion helpers for ``ParsedModel.from_dict``.

    Every helper raises ModelError for values of the wrong JSON shape, so
    malformed input never surfaces as a bare TypeError or ValueError.
    """

    def __init__(self, source: str):
        self.source = source

    def mapping(self, item: Any, what: str) -> Dict[str, Any]:
        if not isinstance(item, dict):
            raise ModelError(f"Expected an object for {what}, got {item!r}")
        return item

    def items(self, item: Dict[str, Any], key: str, what: str) -> List[Any]:
        value = item.get(key, [])
        if not isinstance(value, list):
            raise ModelError(
                f"'{key}' of {what} must be a list, got {value!r}",
                self._span_or_none(item),
            )
        return value

    def strings(self, item: Dict[str, Any], key: str, what: str) -> List[str]:
        values = self.items(item, key, what)
        for value in values:
            if not isinstance(value, str):
                raise ModelError(f"'{key}' of {what} must hold strings, got {value!r}")
        return list(values)

    def text(
        self, item: Dict[str, Any], key: str, what: str, default: Optional[str] = None
    ) -> Optional[str]:
        value = item.get(key, default)
        if value is None:
            return default
        if not isinstance(value, str):
            raise ModelError(
                f"'{key}' of {what} must be a string, got {value!r}",
                self._span_or_none(item),
            )
        return value

    def integer(self, value: Any, what: str, span: Optional[Span] = None) -> int:
        if isinstance(value, bool):
            raise ModelError(f"{what} must be an integer, got {value!r}", span)
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ModelError(f"{what} must be an integer, got {value!r}", span)

    def span(self, item: Dict[str, Any]) -> Optional[Span]:
        raw = self.mapping(item, "declaration").get("span")
        if raw is None:
            return None
        if not isinstance(raw, dict):
            raise ModelError(f"Invalid span: {raw!r}")
        file = raw.get("file", self.source)
        if not isinstance(file, str):
            raise ModelError(f"Invalid span file: {file!r}")
        return Span(
            file=file,
            line=self.integer(raw.get("line", 0), "span line"),
            column=self.integer(raw.get("column", 0), "span column"),
        )

    def _span_or_none(self, item: Dict[str, Any]) -> Optional[Span]:
        # Used while reporting another error; a broken span must not mask it
        try:
            return self.span(item)
        except ModelError:
            return None

    def require(self, item: Any, key: str, what: str) -> Any:
        self.mapping(item, what)
        if key not in item:
            raise ModelError(f"{what} is missing '{key}'", self.span(item))
        return item[key]

    def type_ref(self, text: Any, span: Optional[Span]) -> TypeRef:
        if not isinstance(text, str):
            raise ModelError(f"Type must be a string, got {text!r}", span)
        return parse_type(text, span)

    def types(
        self, item: Dict[str, Any], key: str, span: Optional[Span]
    ) -> Tuple[TypeRef, ...]:
        return tuple(
            self.type_ref(text, span) for text in self.items(item, key, "constructor")
        )

    def parameter(self, item: Any, span: Optional[Span]) -> ParsedParameter:
        param_span = self.span(self.mapping(item, "parameter")) or span
        ty = self.type_ref(self.require(item, "type", "parameter"), param_span)
        if "name" in item:
            return ParsedParameter(
                ty=ty, name=self.text(item, "name", "parameter"), span=param_span
            )
        if "pattern" in item:
            return ParsedParameter(
                ty=ty, pattern=self.text(item, "pattern", "parameter"), span=param_span
            )
        raise ModelError("Parameter needs a 'name' or a 'pattern'", param_span)

    def signature(self, item: Any) -> ParsedSignature:
        self.require(item, "name", "signature")
        name = self.text(item, "name", "signature")
        span = self.span(item)
        returns = item.get("returns")
        return ParsedSignature(
            name=name,
            parameters=tuple(
                self.parameter(p, span) for p in self.items(item, "parameters", "signature")
            ),
            returns=self.type_ref(returns, span) if returns else None,
            cxx_name=self.text(item, "cxx_name", "signature"),
            span=span,
        )

    def method(self, item: Any) -> ParsedMethod:
        return ParsedMethod(
            signature=self.signature(item),
            is_qinvokable=bool(item.get("qinvokable", False)),
        )

    def signal(self, item: Any) -> ParsedSignal:
        return ParsedSignal(
            signature=self.signature(item), inherit=bool(item.get("inherit", False))
        )

    def constructor(self, item: Any) -> ParsedConstructor:
        span = self.span(self.mapping(item, "constructor"))
        return ParsedConstructor(
            arguments=self.types(item, "arguments", span),
            base_arguments=self.types(item, "base_arguments", span),
            new_arguments=self.types(item, "new_arguments", span),
            initialize_arguments=self.types(item, "initialize_arguments", span),
            imp=self.text(item, "impl", "constructor", default=""),
            span=span,
        )

    def property(self, item: Any, span: Optional[Span]) -> ParsedProperty:
        self.require(item, "name", "property")
        prop_span = self.span(item) or span
        return ParsedProperty(
            name=self.text(item, "name", "property"),
            ty=self.type_ref(self.require(item, "type", "property"), prop_span),
            span=prop_span,
        )

    def qobject(self, item: Any, namespace: str) -> ParsedQObject:
        self.require(item, "name", "qobject")
        name = self.text(item, "name", "qobject")
        span = self.span(item)
        return ParsedQObject(
            name=name,
            rust_type=self.text(item, "rust_type", "qobject", default=f"{name}Rust"),
            namespace=self.text(item, "namespace", "qobject", default=namespace),
            base_class=self.text(item, "base_class", "qobject"),
            threading=bool(item.get("threading", False)),
            locking=bool(item.get("locking", True)),
            properties=tuple(
                self.property(p, span) for p in self.items(item, "properties", "qobject")
            ),
            constructors=tuple(
                self.constructor(c) for c in self.items(item, "constructors", "qobject")
            ),
            span=span,
        )

    def qenum(self, item: Any, namespace: str) -> ParsedQEnum:
        self.require(item, "name", "qenum")
        name = self.text(item, "name", "qenum")
        span = self.span(item)
        variants = self.require(item, "variants", "qenum")
        if not isinstance(variants, list):
            raise ModelError(f"Variants of '{name}' must be a list", span)
        parsed = []
        for variant in variants:
            if isinstance(variant, str):
                parsed.append(EnumVariant(variant))
                continue
            self.require(variant, "name", "enum variant")
            value = variant.get("value")
            parsed.append(
                EnumVariant(
                    self.text(variant, "name", "enum variant"),
                    (
                        self.integer(value, "enum variant value", span)
                        if value is not None
                        else None
                    ),
                )
            )
        repr_text = item.get("repr")
        return ParsedQEnum(
            name=name,
            variants=tuple(parsed),
            namespace=self.text(item, "namespace", "qenum", default=namespace),
            qobject=self.text(item, "qobject", "qenum"),
            repr=self.type_ref(repr_text, span) if repr_text else None,
            span=span,
        )

    def extern_qobject(self, item: Any, namespace: str) -> ParsedExternQObject:
        self.require(item, "name", "extern qobject")
        return ParsedExternQObject(
            name=self.text(item, "name", "extern qobject"),
            cxx_name=self.text(item, "cxx_name", "extern qobject"),
            namespace=self.text(item, "namespace", "extern qobject", default=namespace),
            span=self.span(item),
        )

    def extern_block(self, item: Any, namespace: str) -> ParsedExternBlock:
        self.mapping(item, "extern block")
        block_namespace = self.text(item, "namespace", "extern block", default=namespace)
        return ParsedExternBlock(
            namespace=block_namespace,
            qobjects=tuple(
                self.extern_qobject(q, block_namespace)
                for q in self.items(item, "qobjects", "extern block")
            ),
            signals=tuple(
                self.signal(s) for s in self.items(item, "signals", "extern block")
            ),
            span=self.span(item),
        )

    def aliases(self, raw: Any) -> Dict[str, str]:
        """Accept ``{"Ident": "ns::CxxName"}`` or ``{"Ident": {"cxx_name", "namespace"}}``."""
        if not isinstance(raw, dict):
            raise ModelError("'types' must map identifiers to C++ names")
        aliases = {}
        for ident, target in raw.items():
            if isinstance(target, str):
                aliases[ident] = target
            elif isinstance(target, dict):
                what = f"type alias '{ident}'"
                cxx_name = self.text(target, "cxx_name", what, default=ident)
                namespace = self.text(target, "namespace", what, default="")
                aliases[ident] = f"{namespace}::{cxx_name}" if namespace else cxx_name
            else:
                raise ModelError(f"Invalid type alias for '{ident}': {target!r}")
        return aliases
