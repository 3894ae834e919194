"""
C++ generation for bridged QObject classes.

``GeneratedCppBlocks.from_model`` is the entry point; ``CppWriter`` turns
its result into header and source text.
"""

from .blocks import GeneratedCppBlocks
from .constructor import ConstructorSymbols, EntryPoint
from .descriptor import GenerationContext, ObjectDescriptor
from .externcxxqt import GeneratedCppExternCxxQtBlocks
from .params import get_cpp_params
from .qobject import GeneratedCppQObject
from .structuring import StructuredQObject, Structures
from .type_names import TypeName, TypeNames, resolve_cpp_return_type, resolve_cpp_type
from .writer import CppWriter

__all__ = [
    "GeneratedCppBlocks",
    "GeneratedCppQObject",
    "GeneratedCppExternCxxQtBlocks",
    "ConstructorSymbols",
    "EntryPoint",
    "GenerationContext",
    "ObjectDescriptor",
    "get_cpp_params",
    "StructuredQObject",
    "Structures",
    "TypeName",
    "TypeNames",
    "resolve_cpp_type",
    "resolve_cpp_return_type",
    "CppWriter",
]
