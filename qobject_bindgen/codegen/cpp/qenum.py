"""
Enums registered with the meta-object system.

An enum owned by an object is declared inside the class with ``Q_ENUM``;
a free enum is declared in its namespace with ``Q_ENUM_NS``, next to the
``Q_NAMESPACE`` of that namespace.
"""

from typing import Set, Tuple

from ..core.fragment import GeneratedCppQObjectBlocks
from ..core.generator import FeatureGenerator
from ..core.model import ParsedQEnum
from ..core.types import parse_type
from .descriptor import GenerationContext
from .structuring import StructuredQObject
from .type_names import TypeNames, resolve_cpp_type

DEFAULT_REPR = parse_type("i32")


def _definition(qenum: ParsedQEnum, type_names: TypeNames) -> str:
    repr_type = resolve_cpp_type(qenum.repr or DEFAULT_REPR, type_names, qenum.span)
    variants = ",\n".join(
        f"  {v.name}" if v.value is None else f"  {v.name} = {v.value}"
        for v in qenum.variants
    )
    return f"enum class {qenum.name} : {repr_type}\n{{\n{variants}\n}};"


def generate_declaration(qenum: ParsedQEnum, type_names: TypeNames) -> Tuple[str, Set[str]]:
    """Forward declaration of a free enum and the includes it needs."""
    text = (
        f"namespace {qenum.namespace} {{\n"
        f"{_definition(qenum, type_names)}\n"
        f"Q_ENUM_NS({qenum.name})\n"
        f"}} // namespace {qenum.namespace}"
    )
    return text, {"<cstdint>"}


class QEnumGenerator(FeatureGenerator):
    """In-class ``enum class`` declarations of enums owned by an object."""

    @property
    def feature_name(self) -> str:
        return "qenum"

    @property
    def description(self) -> str:
        return "enum class declarations registered with Q_ENUM"

    def generate(self, qobject: StructuredQObject,
                 context: GenerationContext) -> GeneratedCppQObjectBlocks:
        blocks = GeneratedCppQObjectBlocks()
        for qenum in qobject.qenums:
            blocks.metaobjects.append(
                f"{_definition(qenum, context.type_names)}\nQ_ENUM({qenum.name})"
            )
        if qobject.qenums:
            blocks.includes.add("<cstdint>")
        return blocks

    def warnings(self, qobject: StructuredQObject):
        return [
            f"Enum '{qenum.name}' of '{qobject.name}' has no variants"
            for qenum in qobject.qenums
            if not qenum.variants
        ]
