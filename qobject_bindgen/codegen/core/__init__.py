"""
Core code generation components.

Provides the input model, fragment model, errors and utilities shared by
the C++ generators.
"""

from .generator import (
    FeatureGenerator,
    GeneratorError,
    TypeResolutionError,
    UnsupportedPatternError,
    StructuringError,
    ModelError,
    GenerationResult,
    generate_code,
    validate_model,
)
from .types import TypeKind, TypeRef, TypeParseError, parse_type
from .model import (
    Span,
    ParsedParameter,
    ParsedSignature,
    ParsedMethod,
    ParsedSignal,
    ParsedInheritedMethod,
    ParsedProperty,
    ParsedConstructor,
    EnumVariant,
    ParsedQEnum,
    ParsedQObject,
    ParsedExternQObject,
    ParsedExternBlock,
    ParsedModel,
)
from .fragment import CppFragment, CppNamedType, FragmentKind, GeneratedCppQObjectBlocks
from .naming import NameSanitizer, NamingCase
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Generator interface and errors
    "FeatureGenerator",
    "GeneratorError",
    "TypeResolutionError",
    "UnsupportedPatternError",
    "StructuringError",
    "ModelError",
    "GenerationResult",
    "generate_code",
    "validate_model",
    # Input model
    "TypeKind",
    "TypeRef",
    "TypeParseError",
    "parse_type",
    "Span",
    "ParsedParameter",
    "ParsedSignature",
    "ParsedMethod",
    "ParsedSignal",
    "ParsedInheritedMethod",
    "ParsedProperty",
    "ParsedConstructor",
    "EnumVariant",
    "ParsedQEnum",
    "ParsedQObject",
    "ParsedExternQObject",
    "ParsedExternBlock",
    "ParsedModel",
    # Fragments
    "CppFragment",
    "CppNamedType",
    "FragmentKind",
    "GeneratedCppQObjectBlocks",
    # Naming utilities
    "NameSanitizer",
    "NamingCase",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
