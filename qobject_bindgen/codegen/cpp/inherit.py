"""
Base-class methods made callable from the business-logic side.
"""

from ..core.fragment import CppFragment, GeneratedCppQObjectBlocks
from ..core.generator import FeatureGenerator
from ..core.naming import cpp_method_name
from .descriptor import GenerationContext
from .params import get_cpp_params
from .structuring import StructuredQObject
from .type_names import resolve_cpp_return_type


class InheritGenerator(FeatureGenerator):
    """Header-only ``...CxxQtInherit`` templates forwarding to the base class."""

    @property
    def feature_name(self) -> str:
        return "inherit"

    @property
    def description(self) -> str:
        return "Forwarding templates for inherited base-class methods"

    def generate(self, qobject: StructuredQObject,
                 context: GenerationContext) -> GeneratedCppQObjectBlocks:
        blocks = GeneratedCppQObjectBlocks()
        base_class = context.descriptor.base_class

        for inherited in qobject.inherited_methods:
            signature = inherited.signature
            # Parameters are forwarded as a pack, but must still be plain names
            get_cpp_params(signature, context.type_names)
            returns = resolve_cpp_return_type(
                signature.returns, context.type_names, signature.span
            )
            base_ident = cpp_method_name(signature.name, signature.cxx_name)
            is_const = "" if signature.is_mutable else " const"

            blocks.methods.append(
                CppFragment.header_only(
                    "template <class... Args>\n"
                    f"{returns} {base_ident}CxxQtInherit(Args... args){is_const}\n"
                    "{\n"
                    f"  return {base_class}::{base_ident}(args...);\n"
                    "}"
                )
            )

        return blocks
