"""
Properties: ``Q_PROPERTY`` entries with their getter, setter and notify signal.

The public accessors take the lock and forward to private ``...Wrapper``
declarations implemented on the business-logic side.
"""

from ..core.fragment import CppFragment, GeneratedCppQObjectBlocks
from ..core.generator import FeatureGenerator
from ..core.naming import cpp_method_name, to_pascal_case
from ...logging_config import get_logger
from .descriptor import GenerationContext
from .structuring import StructuredQObject
from .type_names import resolve_cpp_type

logger = get_logger(__name__)


class PropertyGenerator(FeatureGenerator):
    """Generate the C++ side of every property of an object."""

    @property
    def feature_name(self) -> str:
        return "property"

    @property
    def description(self) -> str:
        return "Q_PROPERTY entries with getters, setters and change signals"

    def generate(self, qobject: StructuredQObject,
                 context: GenerationContext) -> GeneratedCppQObjectBlocks:
        blocks = GeneratedCppQObjectBlocks()
        class_name = context.descriptor.ident

        for prop in qobject.declaration.properties:
            cpp_type = resolve_cpp_type(prop.ty, context.type_names, prop.span)
            name = cpp_method_name(prop.name)
            pascal = to_pascal_case(prop.name)
            getter = f"get{pascal}"
            setter = f"set{pascal}"
            notify = f"{name}Changed"
            logger.debug("%s: property %s", class_name, name)

            blocks.metaobjects.append(
                f"Q_PROPERTY({cpp_type} {name} READ {getter} WRITE {setter} NOTIFY {notify})"
            )
            blocks.methods.append(
                CppFragment.pair(
                    f"{cpp_type} const& {getter}() const;",
                    f"{cpp_type} const&\n"
                    f"{class_name}::{getter}() const\n"
                    + context.body(f"return {getter}Wrapper();"),
                )
            )
            blocks.methods.append(
                CppFragment.pair(
                    f"Q_SLOT void {setter}({cpp_type} const& value);",
                    "void\n"
                    f"{class_name}::{setter}({cpp_type} const& value)\n"
                    + context.body(f"{setter}Wrapper(value);"),
                )
            )
            blocks.methods.append(CppFragment.header_only(f"Q_SIGNAL void {notify}();"))
            blocks.private_methods.append(
                CppFragment.header_only(f"{cpp_type} const& {getter}Wrapper() const noexcept;")
            )
            blocks.private_methods.append(
                CppFragment.header_only(f"void {setter}Wrapper({cpp_type} value) noexcept;")
            )

        return blocks

    def warnings(self, qobject: StructuredQObject):
        names = [cpp_method_name(p.name) for p in qobject.declaration.properties]
        return [
            f"Property '{name}' of '{qobject.name}' is declared more than once"
            for name in sorted({n for n in names if names.count(n) > 1})
        ]
