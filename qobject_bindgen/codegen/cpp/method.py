"""
Methods implemented by the business object and callable from C++.
"""

from ..core.fragment import CppFragment, GeneratedCppQObjectBlocks, join_arguments
from ..core.generator import FeatureGenerator
from ..core.naming import cpp_method_name
from ...logging_config import get_logger
from .descriptor import GenerationContext
from .params import get_cpp_params
from .structuring import StructuredQObject
from .type_names import resolve_cpp_return_type

logger = get_logger(__name__)


class MethodGenerator(FeatureGenerator):
    """Public method pairs forwarding to private ``...Wrapper`` declarations."""

    @property
    def feature_name(self) -> str:
        return "method"

    @property
    def description(self) -> str:
        return "Methods (optionally Q_INVOKABLE) delegating to the business object"

    def generate(self, qobject: StructuredQObject,
                 context: GenerationContext) -> GeneratedCppQObjectBlocks:
        blocks = GeneratedCppQObjectBlocks()
        class_name = context.descriptor.ident

        for method in qobject.methods:
            signature = method.signature
            params = get_cpp_params(signature, context.type_names)
            returns = resolve_cpp_return_type(
                signature.returns, context.type_names, signature.span
            )
            ident = cpp_method_name(signature.name, signature.cxx_name)
            wrapper = f"{ident}Wrapper"
            is_const = "" if signature.is_mutable else " const"
            invokable = "Q_INVOKABLE " if method.is_qinvokable else ""
            parameters = join_arguments(params)
            call = f"{wrapper}({', '.join(p.ident for p in params)});"
            statement = call if returns == "void" else f"return {call}"
            logger.debug("%s: method %s", class_name, ident)

            blocks.methods.append(
                CppFragment.pair(
                    f"{invokable}{returns} {ident}({parameters}){is_const};",
                    f"{returns}\n"
                    f"{class_name}::{ident}({parameters}){is_const}\n"
                    + context.body(statement),
                )
            )
            blocks.private_methods.append(
                CppFragment.header_only(
                    f"{returns} {wrapper}({parameters}){is_const} noexcept;"
                )
            )

        return blocks
