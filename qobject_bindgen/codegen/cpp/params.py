"""
Parameter Extractor.
"""

from typing import List, TYPE_CHECKING

from ..core.fragment import CppNamedType
from ..core.generator import UnsupportedPatternError
from .type_names import resolve_cpp_type

if TYPE_CHECKING:
    from ..core.model import ParsedSignature
    from .type_names import TypeNames


def get_cpp_params(signature: "ParsedSignature", type_names: "TypeNames") -> List[CppNamedType]:
    """
    Names and C++ types of a signature's parameters, in declaration order.

    The ``self`` receiver is dropped. Every other parameter must bind a
    single name.

    Raises:
        UnsupportedPatternError: If a parameter destructures its argument
        TypeResolutionError: If a parameter type has no C++ spelling
    """
    params = []
    for parameter in signature.parameters:
        span = parameter.span or signature.span
        if not parameter.is_ident:
            raise UnsupportedPatternError(
                f"Unknown pattern for type in '{signature.name}': {parameter.pattern}",
                span,
            )
        if parameter.is_receiver:
            continue
        params.append(
            CppNamedType(
                ident=parameter.name,
                ty=resolve_cpp_type(parameter.ty, type_names, span),
            )
        )
    return params
