"""
Constructor Generator.

Every declared constructor becomes a pair of C++ constructors:

* a public one taking the caller's arguments, which hands them to the
  business-logic ``routeArguments{i}`` entry point and delegates to
* a private one taking the routed aggregate, which constructs the base
  class from ``args.base``, the business object from ``args.new_`` through
  ``newRs{i}``, and finally calls ``initialize{i}`` with ``args.initialize``.

Symbol names depend only on the constructor's index in its declaring list.
An object without declared constructors gets a single default constructor
that builds the business object through ``createRs``.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, TYPE_CHECKING

from ..core.fragment import CppFragment, CppNamedType, GeneratedCppQObjectBlocks
from ...logging_config import get_logger
from .cxxqttype import RUST_OBJ_MEMBER
from .type_names import resolve_cpp_type

if TYPE_CHECKING:
    from ..core.model import ParsedConstructor, Span
    from ..core.types import TypeRef
    from .descriptor import ObjectDescriptor
    from .type_names import TypeNames

logger = get_logger(__name__)


@dataclass(frozen=True)
class ConstructorSymbols:
    """Names shared by the generated C++ and the business-logic side."""

    index: int

    @property
    def route_arguments(self) -> str:
        return f"routeArguments{self.index}"

    @property
    def arguments(self) -> str:
        return f"ConstructorArguments{self.index}"

    @property
    def new_rs(self) -> str:
        return f"newRs{self.index}"

    @property
    def initialize(self) -> str:
        return f"initialize{self.index}"


CREATE_RS = "createRs"


@dataclass(frozen=True)
class EntryPoint:
    """One function the business-logic side must provide.

    For ``newRs{i}`` and ``initialize{i}`` the parameters after the object
    describe the fields of the matching sub-group of the routed aggregate.
    """

    name: str
    qualified: str
    parameters: Tuple[CppNamedType, ...]
    returns: str
    called_from: str

    @property
    def signature(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"{self.returns} {self.qualified}({params})"


def argument_names(arguments: Sequence["TypeRef"]) -> List[str]:
    return [f"arg{index}" for index in range(len(arguments))]


def _named(arguments: Sequence["TypeRef"], type_names: "TypeNames",
           span: Optional["Span"] = None) -> List[CppNamedType]:
    return [
        CppNamedType(name, resolve_cpp_type(ty, type_names, span))
        for name, ty in zip(argument_names(arguments), arguments)
    ]


def _default_constructor(descriptor: "ObjectDescriptor",
                         initializers: str) -> GeneratedCppQObjectBlocks:
    class_name = descriptor.ident
    create_rs = descriptor.internal(CREATE_RS)
    source = (
        f"{class_name}::{class_name}(QObject* parent)\n"
        f"  : {descriptor.base_class}(parent)\n"
        f"  , {RUST_OBJ_MEMBER}({create_rs}()){initializers}\n"
        "{ }\n"
    )
    return GeneratedCppQObjectBlocks(
        methods=[
            CppFragment.pair(
                f"explicit {class_name}(QObject* parent = nullptr);", source
            )
        ]
    )


def generate(
    descriptor: "ObjectDescriptor",
    constructors: Sequence["ParsedConstructor"],
    member_initializers: Sequence[str],
    type_names: "TypeNames",
) -> GeneratedCppQObjectBlocks:
    """
    Generate the constructors of one object.

    Args:
        descriptor: Naming facts of the object
        constructors: Declared constructors, in declaration order
        member_initializers: Extra member initializer snippets, appended to
            every initializer list in the given order
        type_names: Identifier table used to spell public argument types

    Returns:
        Blocks holding only constructor fragments: public constructors in
        ``methods`` and routed constructors in ``private_methods``

    Raises:
        TypeResolutionError: If a public argument type cannot be spelled
    """
    initializers = "".join(
        f"\n  , {initializer}" for initializer in member_initializers
    )

    if not constructors:
        logger.debug("%s: default constructor", descriptor.ident)
        return _default_constructor(descriptor, initializers)

    generated = GeneratedCppQObjectBlocks()
    class_name = descriptor.ident

    for index, constructor in enumerate(constructors):
        symbols = ConstructorSymbols(index)
        logger.debug("%s: constructor %d", class_name, index)

        argument_list = ", ".join(
            str(arg) for arg in _named(constructor.arguments, type_names, constructor.span)
        )
        move_arguments = ", ".join(
            f"std::move({name})" for name in argument_names(constructor.arguments)
        )
        generated.methods.append(
            CppFragment.pair(
                f"explicit {class_name}({argument_list});",
                f"{class_name}::{class_name}({argument_list})\n"
                f"  : {class_name}("
                f"{descriptor.internal(symbols.route_arguments)}({move_arguments}))\n"
                "{ }\n",
            )
        )

        base_args = ", ".join(
            f"std::move(args.base.{name})"
            for name in argument_names(constructor.base_arguments)
        )
        routed = f"{descriptor.internal(symbols.arguments)}&& args"
        generated.private_methods.append(
            CppFragment.pair(
                f"explicit {class_name}({routed});",
                f"{class_name}::{class_name}({routed})\n"
                f"  : {descriptor.base_class}({base_args})\n"
                f"  , {RUST_OBJ_MEMBER}("
                f"{descriptor.internal(symbols.new_rs)}(std::move(args.new_))){initializers}\n"
                "{\n"
                f"  {descriptor.internal(symbols.initialize)}"
                "(*this, std::move(args.initialize));\n"
                "}\n",
            )
        )

    return generated


def entry_points(
    descriptor: "ObjectDescriptor",
    constructors: Sequence["ParsedConstructor"],
    type_names: "TypeNames",
) -> List[EntryPoint]:
    """
    The business-logic functions the generated constructors call.

    Every type in all four argument lists is resolved, so an unknown type
    anywhere in a constructor fails here.

    Raises:
        TypeResolutionError: If any constructor argument type cannot be spelled
    """
    business_object = f"rust::Box<{descriptor.rust_qualified}>"

    if not constructors:
        return [
            EntryPoint(
                name=CREATE_RS,
                qualified=descriptor.internal(CREATE_RS),
                parameters=(),
                returns=business_object,
                called_from="default constructor",
            )
        ]

    points = []
    for index, constructor in enumerate(constructors):
        symbols = ConstructorSymbols(index)
        span = constructor.span
        points.append(
            EntryPoint(
                name=symbols.route_arguments,
                qualified=descriptor.internal(symbols.route_arguments),
                parameters=tuple(_named(constructor.arguments, type_names, span)),
                returns=descriptor.internal(symbols.arguments),
                called_from=f"public constructor {index}",
            )
        )
        # Base arguments are consumed by the base class, not by a function
        _named(constructor.base_arguments, type_names, span)
        points.append(
            EntryPoint(
                name=symbols.new_rs,
                qualified=descriptor.internal(symbols.new_rs),
                parameters=tuple(_named(constructor.new_arguments, type_names, span)),
                returns=business_object,
                called_from=f"private constructor {index}",
            )
        )
        points.append(
            EntryPoint(
                name=symbols.initialize,
                qualified=descriptor.internal(symbols.initialize),
                parameters=(CppNamedType("qobject", f"{descriptor.cxx_qualified}&"),)
                + tuple(_named(constructor.initialize_arguments, type_names, span)),
                returns="void",
                called_from=f"private constructor {index}",
            )
        )
    return points
