"""
Semantic type references.

The front end hands over business-logic types as Rust type expressions
(``i32``, ``*mut QObject``, ``Pin<&mut MyObject>``, ``[u8; 4]`` ...).
They are parsed once into immutable ``TypeRef`` trees which the
type-name resolver later spells in C++.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, TYPE_CHECKING

from .generator import ModelError

if TYPE_CHECKING:
    from .model import Span


class TypeKind(Enum):
    """Shapes of a type expression."""

    PATH = "path"  # Foo, std::Foo, Vec<T>
    REFERENCE = "reference"  # &T, &mut T
    POINTER = "pointer"  # *const T, *mut T
    SLICE = "slice"  # [T]
    ARRAY = "array"  # [T; N]
    FUNCTION = "function"  # fn(A, B) -> R
    TUPLE = "tuple"  # (), (A, B)


@dataclass(frozen=True)
class TypeRef:
    """Immutable parsed type expression."""

    kind: TypeKind
    path: Tuple[str, ...] = ()
    args: Tuple["TypeRef", ...] = ()
    inner: Optional["TypeRef"] = None
    mutable: bool = False
    length: Optional[str] = None
    text: str = field(default="", compare=False)

    @property
    def ident(self) -> str:
        """Last path segment, empty for non-path types."""
        return self.path[-1] if self.path else ""

    @property
    def is_unit(self) -> bool:
        return self.kind == TypeKind.TUPLE and not self.args

    def is_path(self, ident: str, arity: Optional[int] = None) -> bool:
        """Check for a path type ending in ``ident`` with ``arity`` generic args."""
        if self.kind != TypeKind.PATH or self.ident != ident:
            return False
        return arity is None or len(self.args) == arity

    def __str__(self) -> str:
        return self.text or _format(self)


class TypeParseError(ModelError):
    """A type expression could not be parsed."""

    pass


_TOKEN_RE = re.compile(
    r"\s*(?:(::|->)|('[A-Za-z_][A-Za-z0-9_]*)|([A-Za-z_][A-Za-z0-9_]*)|(\d+)|([&*<>\[\];,()]))"
)


def _tokenize(text: str, span: Optional["Span"]) -> List[str]:
    tokens = []
    pos = 0
    stripped = text.rstrip()
    while pos < len(stripped):
        match = _TOKEN_RE.match(stripped, pos)
        if not match or match.end() == pos:
            raise TypeParseError(
                f"Unexpected character {stripped[pos]!r} in type '{text}'", span
            )
        token = next(group for group in match.groups() if group is not None)
        tokens.append(token)
        pos = match.end()
    return tokens


class _TypeParser:
    """Recursive-descent parser over a token list."""

    def __init__(self, text: str, span: Optional["Span"]):
        self.text = text
        self.span = span
        self.tokens = _tokenize(text, span)
        self.pos = 0

    def error(self, message: str) -> TypeParseError:
        return TypeParseError(f"{message} in type '{self.text}'", self.span)

    def peek(self) -> Optional[str]:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def take(self, expected: Optional[str] = None) -> str:
        token = self.peek()
        if token is None:
            raise self.error("Unexpected end")
        if expected is not None and token != expected:
            raise self.error(f"Expected '{expected}', found '{token}'")
        self.pos += 1
        return token

    def accept(self, token: str) -> bool:
        if self.peek() == token:
            self.pos += 1
            return True
        return False

    def parse(self) -> TypeRef:
        result = self.parse_type()
        if self.peek() is not None:
            raise self.error(f"Trailing '{self.peek()}'")
        return result

    def parse_type(self) -> TypeRef:
        token = self.peek()
        if token is None:
            raise self.error("Empty type")

        if token == "&":
            self.take()
            if self.peek() and self.peek().startswith("'"):
                self.take()  # lifetimes carry no meaning on the C++ side
            mutable = self.accept("mut")
            return TypeRef(TypeKind.REFERENCE, inner=self.parse_type(), mutable=mutable)

        if token == "*":
            self.take()
            if self.accept("mut"):
                mutable = True
            else:
                self.take("const")
                mutable = False
            return TypeRef(TypeKind.POINTER, inner=self.parse_type(), mutable=mutable)

        if token == "[":
            self.take()
            element = self.parse_type()
            if self.accept(";"):
                length = self.take()
                if not length.isdigit() and not length.isidentifier():
                    raise self.error(f"Invalid array length '{length}'")
                self.take("]")
                return TypeRef(TypeKind.ARRAY, inner=element, length=length)
            self.take("]")
            return TypeRef(TypeKind.SLICE, inner=element)

        if token == "(":
            self.take()
            elements = self.parse_list(")")
            return TypeRef(TypeKind.TUPLE, args=tuple(elements))

        if token == "fn":
            self.take()
            self.take("(")
            params = self.parse_list(")")
            returns = self.parse_type() if self.accept("->") else None
            return TypeRef(TypeKind.FUNCTION, args=tuple(params), inner=returns)

        return self.parse_path()

    def parse_list(self, closing: str) -> List[TypeRef]:
        items = []
        while not self.accept(closing):
            items.append(self.parse_type())
            if not self.accept(","):
                self.take(closing)
                break
        return items

    def parse_path(self) -> TypeRef:
        segments = []
        self.accept("::")
        while True:
            token = self.take()
            if not token.isidentifier():
                raise self.error(f"Expected identifier, found '{token}'")
            segments.append(token)
            if not self.accept("::"):
                break

        args: List[TypeRef] = []
        if self.accept("<"):
            while True:
                if self.peek() and self.peek().startswith("'"):
                    self.take()
                else:
                    args.append(self.parse_type())
                if not self.accept(","):
                    break
            self.take(">")

        return TypeRef(TypeKind.PATH, path=tuple(segments), args=tuple(args))


def parse_type(text: str, span: Optional["Span"] = None) -> TypeRef:
    """
    Parse a Rust type expression.

    Args:
        text: Type expression, e.g. ``Pin<&mut MyObject>``
        span: Source location used in error messages

    Returns:
        Parsed TypeRef whose ``text`` is the original expression

    Raises:
        TypeParseError: If the expression is malformed
    """
    parsed = _TypeParser(text, span).parse()
    return _with_text(parsed, text.strip())


def _with_text(type_ref: TypeRef, text: str) -> TypeRef:
    return TypeRef(
        kind=type_ref.kind,
        path=type_ref.path,
        args=type_ref.args,
        inner=type_ref.inner,
        mutable=type_ref.mutable,
        length=type_ref.length,
        text=text,
    )


def _format(type_ref: TypeRef) -> str:
    """Spell a TypeRef back as a Rust expression."""
    kind = type_ref.kind
    if kind == TypeKind.PATH:
        base = "::".join(type_ref.path)
        if type_ref.args:
            base += "<" + ", ".join(_format(a) for a in type_ref.args) + ">"
        return base
    elif kind == TypeKind.REFERENCE:
        return ("&mut " if type_ref.mutable else "&") + _format(type_ref.inner)
    elif kind == TypeKind.POINTER:
        return ("*mut " if type_ref.mutable else "*const ") + _format(type_ref.inner)
    elif kind == TypeKind.SLICE:
        return f"[{_format(type_ref.inner)}]"
    elif kind == TypeKind.ARRAY:
        return f"[{_format(type_ref.inner)}; {type_ref.length}]"
    elif kind == TypeKind.FUNCTION:
        params = ", ".join(_format(a) for a in type_ref.args)
        if type_ref.inner is None:
            return f"fn({params})"
        return f"fn({params}) -> {_format(type_ref.inner)}"
    else:
        return "(" + ", ".join(_format(a) for a in type_ref.args) + ")"


def receiver_ident(type_ref: TypeRef) -> Optional[str]:
    """
    Find the object a receiver type points at.

    ``&T``, ``&mut T``, ``Pin<&mut T>`` and ``T`` all yield ``T``.
    """
    current = type_ref
    if current.is_path("Pin", 1):
        current = current.args[0]
    if current.kind == TypeKind.REFERENCE:
        current = current.inner
    if current.kind == TypeKind.PATH and not current.args:
        return current.ident
    return None


def is_mutable_receiver(type_ref: TypeRef) -> bool:
    """True for ``Pin<&mut T>`` and ``&mut T`` receivers."""
    current = type_ref
    if current.is_path("Pin", 1):
        current = current.args[0]
    return current.kind == TypeKind.REFERENCE and current.mutable
