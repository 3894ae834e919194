"""
Naming utilities for safe code generation.

Handles case conversion between the business-logic side (snake_case) and
the framework side (camelCase / PascalCase), and keeps generated C++
identifiers clear of reserved words.
"""

import re
from typing import Set, Dict
from enum import Enum


class NamingCase(Enum):
    """Different naming case styles."""
    SNAKE_CASE = "snake"      # user_name
    CAMEL_CASE = "camel"      # userName
    PASCAL_CASE = "pascal"    # UserName
    SCREAMING_SNAKE = "screaming_snake"  # USER_NAME


CPP_RESERVED_WORDS = {
    'alignas', 'alignof', 'and', 'asm', 'auto', 'bitand', 'bitor', 'bool',
    'break', 'case', 'catch', 'char', 'class', 'compl', 'concept', 'const',
    'consteval', 'constexpr', 'constinit', 'const_cast', 'continue',
    'co_await', 'co_return', 'co_yield', 'decltype', 'default', 'delete',
    'do', 'double', 'dynamic_cast', 'else', 'enum', 'explicit', 'export',
    'extern', 'false', 'float', 'for', 'friend', 'goto', 'if', 'inline',
    'int', 'long', 'mutable', 'namespace', 'new', 'noexcept', 'not',
    'nullptr', 'operator', 'or', 'private', 'protected', 'public',
    'register', 'reinterpret_cast', 'requires', 'return', 'short', 'signed',
    'sizeof', 'static', 'static_assert', 'static_cast', 'struct', 'switch',
    'template', 'this', 'thread_local', 'throw', 'true', 'try', 'typedef',
    'typeid', 'typename', 'union', 'unsigned', 'using', 'virtual', 'void',
    'volatile', 'wchar_t', 'while', 'xor',
}

# Names the meta-object system claims on every QObject subclass
QT_RESERVED_NAMES = {
    'connect', 'disconnect', 'emit', 'signals', 'slots', 'parent',
    'deleteLater', 'destroyed', 'objectName', 'setObjectName',
    'metaObject', 'staticMetaObject',
}


class NameSanitizer:
    """Handles name sanitization and case conversion."""

    def __init__(self, reserved_words: Set[str] = None, builtin_types: Set[str] = None):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Set of language reserved words
            builtin_types: Set of builtin names that might conflict
        """
        self.reserved_words = reserved_words or set()
        self.builtin_types = builtin_types or set()
        self._name_cache: Dict[str, str] = {}

    def sanitize_name(self, name: str, target_case: NamingCase = NamingCase.SNAKE_CASE,
                      suffix_on_conflict: str = "_") -> str:
        """
        Sanitize a name for safe use in C++.

        The result only depends on the arguments, so repeated calls for the
        getter and setter of one property agree.

        Args:
            name: Original name to sanitize
            target_case: Desired case style
            suffix_on_conflict: Suffix appended to reserved words

        Returns:
            Sanitized name safe for use
        """
        cache_key = f"{name}_{target_case.value}_{suffix_on_conflict}"
        if cache_key in self._name_cache:
            return self._name_cache[cache_key]

        cleaned = self._clean_basic(name)
        converted = convert_case(cleaned, target_case)
        final_name = self._resolve_conflicts(converted, suffix_on_conflict)

        self._name_cache[cache_key] = final_name
        return final_name

    def is_reserved(self, name: str) -> bool:
        return name in self.reserved_words or name in self.builtin_types

    def _clean_basic(self, name: str) -> str:
        """Basic name cleanup - remove invalid characters."""
        # Rust raw identifiers
        if name.startswith('r#'):
            name = name[2:]

        cleaned = re.sub(r'[^a-zA-Z0-9_]', '_', name)
        cleaned = cleaned.strip('_')

        if cleaned and cleaned[0].isdigit():
            cleaned = f"_{cleaned}"

        if not cleaned:
            cleaned = "value"

        return cleaned

    def _resolve_conflicts(self, name: str, suffix: str) -> str:
        """Resolve conflicts with reserved words."""
        if self.is_reserved(name):
            return f"{name}{suffix}"
        return name


def to_snake_case(name: str) -> str:
    """Convert to snake_case."""
    name = name.replace('-', '_')

    # Insert underscore before uppercase letters
    name = re.sub(r'([a-z0-9])([A-Z])', r'\1_\2', name)
    name = re.sub(r'([A-Z]+)([A-Z][a-z])', r'\1_\2', name)

    name = name.lower()
    name = re.sub(r'_+', '_', name)

    return name.strip('_')


def to_camel_case(name: str) -> str:
    """Convert to camelCase."""
    parts = to_snake_case(name).split('_')

    if not parts:
        return name

    return parts[0] + ''.join(part.capitalize() for part in parts[1:])


def to_pascal_case(name: str) -> str:
    """Convert to PascalCase."""
    parts = to_snake_case(name).split('_')
    return ''.join(part.capitalize() for part in parts if part)


def convert_case(name: str, target_case: NamingCase) -> str:
    """Convert name to target case style."""
    if target_case == NamingCase.SNAKE_CASE:
        return to_snake_case(name)
    elif target_case == NamingCase.CAMEL_CASE:
        return to_camel_case(name)
    elif target_case == NamingCase.PASCAL_CASE:
        return to_pascal_case(name)
    elif target_case == NamingCase.SCREAMING_SNAKE:
        return to_snake_case(name).upper()
    else:
        return name


def create_cpp_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for generated C++ members."""
    return NameSanitizer(CPP_RESERVED_WORDS, QT_RESERVED_NAMES)


_cpp_sanitizer = create_cpp_sanitizer()


def cpp_method_name(name: str, cxx_name: str = None) -> str:
    """C++ spelling of a business-logic method name.

    An explicit ``cxx_name`` wins and is used verbatim.
    """
    if cxx_name:
        return cxx_name
    return _cpp_sanitizer.sanitize_name(name, NamingCase.CAMEL_CASE)


def qualify(namespace: str, name: str) -> str:
    """Join a namespace and a name with ``::`` (no leading qualifier)."""
    return f"{namespace}::{name}" if namespace else name
