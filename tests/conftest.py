"""Shared fixtures for the qobject_bindgen test suite."""

import pytest

from qobject_bindgen.codegen.core.config import GeneratorConfig
from qobject_bindgen.codegen.core.model import ParsedConstructor
from qobject_bindgen.codegen.core.types import parse_type
from qobject_bindgen.codegen.cpp.descriptor import GenerationContext, ObjectDescriptor
from qobject_bindgen.codegen.cpp.type_names import TypeName, TypeNames


@pytest.fixture
def descriptor():
    """Object named MyObject with helpers in the ``rust`` namespace."""
    return ObjectDescriptor(
        ident="MyObject",
        rust_ident="MyObjectRust",
        namespace="",
        namespace_internals="rust",
        base_class="BaseClass",
    )


@pytest.fixture
def type_names():
    entries = dict(TypeNames.builtins()._entries)
    entries["MyObject"] = TypeName("MyObject")
    entries["MyObjectRust"] = TypeName("MyObjectRust")
    entries["Color"] = TypeName("Color", "my_ns")
    return TypeNames(entries)


@pytest.fixture
def config():
    return GeneratorConfig()


@pytest.fixture
def context(descriptor, type_names, config):
    return GenerationContext(
        descriptor,
        type_names,
        "const std::lock_guard<std::recursive_mutex> guard(*m_rustObjMutex);",
        config,
    )


@pytest.fixture
def make_constructor():
    """Build a ParsedConstructor from lists of Rust type strings."""

    def _make(arguments=(), base_arguments=(), new_arguments=(), initialize_arguments=()):
        return ParsedConstructor(
            arguments=tuple(parse_type(t) for t in arguments),
            base_arguments=tuple(parse_type(t) for t in base_arguments),
            new_arguments=tuple(parse_type(t) for t in new_arguments),
            initialize_arguments=tuple(parse_type(t) for t in initialize_arguments),
            imp="impl cxx_qt::Constructor<(i8, i16)> for qobject::MyObject",
        )

    return _make


@pytest.fixture
def bridge_dict():
    """A bridge description exercising every feature."""
    return {
        "cxx_file_stem": "my_object",
        "namespace": "cxx_qt::my_object",
        "qobjects": [
            {
                "name": "MyObject",
                "rust_type": "MyObjectRust",
                "base_class": "QAbstractItemModel",
                "threading": True,
                "properties": [
                    {"name": "number", "type": "i32"},
                    {"name": "string_value", "type": "QString"},
                ],
                "constructors": [
                    {
                        "arguments": ["i32", "&QString"],
                        "base_arguments": ["*mut QObject"],
                        "new_arguments": ["i32"],
                        "initialize_arguments": ["QString"],
                        "impl": "impl cxx_qt::Constructor<(i32, QString)> for MyObject",
                    }
                ],
                "span": {"file": "src/lib.rs", "line": 10, "column": 9},
            },
            {
                "name": "Child",
                "base_class": "MyObject",
                "locking": False,
            },
        ],
        "methods": [
            {
                "name": "say_hi",
                "parameters": [
                    {"name": "self", "type": "Pin<&mut MyObject>"},
                    {"name": "string", "type": "&QString"},
                    {"name": "number", "type": "i32"},
                ],
                "qinvokable": True,
            },
            {
                "name": "compute",
                "parameters": [{"name": "self", "type": "&Child"}],
                "returns": "f64",
            },
        ],
        "signals": [
            {
                "name": "ready",
                "parameters": [{"name": "self", "type": "Pin<&mut MyObject>"}],
            },
            {
                "name": "data_changed",
                "parameters": [
                    {"name": "self", "type": "Pin<&mut MyObject>"},
                    {"name": "top_left", "type": "&QModelIndex"},
                ],
                "inherit": True,
            },
        ],
        "inherited_methods": [
            {
                "name": "has_children",
                "parameters": [
                    {"name": "self", "type": "&MyObject"},
                    {"name": "parent", "type": "&QModelIndex"},
                ],
                "returns": "bool",
            }
        ],
        "qenums": [
            {"name": "State", "qobject": "MyObject", "variants": ["Idle", {"name": "Running", "value": 5}]},
            {"name": "Mode", "namespace": "cxx_qt::my_object", "variants": ["On", "Off"]},
        ],
        "qnamespaces": ["cxx_qt::my_object"],
        "extern_cxxqt_blocks": [
            {
                "namespace": "external",
                "qobjects": [{"name": "ExternObject"}],
                "signals": [
                    {
                        "name": "triggered",
                        "parameters": [
                            {"name": "self", "type": "Pin<&mut ExternObject>"},
                            {"name": "value", "type": "u32"},
                        ],
                    }
                ],
            }
        ],
        "types": {"QAbstractItemModel": "QAbstractItemModel"},
        "includes": ["<QtCore/QAbstractItemModel>"],
    }
