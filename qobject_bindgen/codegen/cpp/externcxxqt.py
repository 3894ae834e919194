"""
Glue for framework objects declared in C++ and consumed from Rust.

The business-logic side cannot take member function pointers, so every
signal of an extern object gets a free ``Object_signalConnect`` function
in the extern internals namespace.
"""

from dataclasses import dataclass, field
from typing import List, Sequence, Set

from ..core.config import GeneratorConfig
from ..core.fragment import CppFragment
from ..core.generator import StructuringError
from ..core.model import ParsedExternBlock
from ..core.naming import cpp_method_name
from ...logging_config import get_logger
from .params import get_cpp_params
from .signal import CONNECTION_INCLUDE, connect_body, connect_function_type
from .type_names import TypeNames

logger = get_logger(__name__)


@dataclass
class GeneratedCppExternCxxQtBlocks:
    """Generated declarations of one extern block."""

    namespace: str = ""
    method: List[CppFragment] = field(default_factory=list)
    forward_declares: List[str] = field(default_factory=list)
    includes: Set[str] = field(default_factory=set)


def generate(blocks: Sequence[ParsedExternBlock], type_names: TypeNames,
             config: GeneratorConfig) -> List[GeneratedCppExternCxxQtBlocks]:
    """
    Generate the connect helpers of every extern block.

    Raises:
        StructuringError: If a signal's receiver is not an object of its block
        UnsupportedPatternError: If a signal parameter is not a plain name
        TypeResolutionError: If a signal parameter type cannot be spelled
    """
    generated = []

    for block in blocks:
        result = GeneratedCppExternCxxQtBlocks(namespace=config.extern_namespace_internals)
        declared = {qobject.name for qobject in block.qobjects}

        for signal in block.signals:
            signature = signal.signature
            owner = signature.self_ident
            if owner is None or owner not in declared:
                raise StructuringError(
                    f"Signal '{signature.name}' does not belong to an object "
                    "of its extern block",
                    signature.span,
                )

            params = get_cpp_params(signature, type_names)
            object_type = type_names.cxx_qualified(owner, signature.span)
            ident = cpp_method_name(signature.name, signature.cxx_name)
            connect = f"{owner}_{ident}Connect"
            connect_params = (
                f"{object_type}& self, "
                f"{connect_function_type(object_type, params)} func, "
                "Qt::ConnectionType type"
            )
            logger.debug("Extern %s: signal %s", owner, ident)

            result.method.append(
                CppFragment.pair(
                    f"QMetaObject::Connection {connect}({connect_params});",
                    "QMetaObject::Connection\n"
                    f"{connect}({connect_params})\n"
                    + connect_body("&self", f"&{object_type}::{ident}", "self", params, []),
                )
            )

        if block.signals:
            result.includes.add(CONNECTION_INCLUDE)
        generated.append(result)

    return generated
