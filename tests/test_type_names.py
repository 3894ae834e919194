"""Tests for the type-name resolver."""

import pytest

from qobject_bindgen.codegen.core.generator import TypeResolutionError
from qobject_bindgen.codegen.core.model import ParsedModel, Span
from qobject_bindgen.codegen.core.types import parse_type
from qobject_bindgen.codegen.cpp.type_names import (
    TypeNames,
    resolve_cpp_return_type,
    resolve_cpp_type,
)


def resolve(text, type_names):
    return resolve_cpp_type(parse_type(text), type_names)


class TestResolveCppType:
    @pytest.mark.parametrize(
        "rust, cpp",
        [
            ("i8", "std::int8_t"),
            ("u64", "std::uint64_t"),
            ("isize", "rust::isize"),
            ("usize", "std::size_t"),
            ("f32", "float"),
            ("bool", "bool"),
            ("()", "void"),
            ("String", "rust::String"),
            ("&str", "rust::Str"),
            ("*mut QObject", "QObject*"),
            ("*const QObject", "QObject const*"),
            ("&QString", "QString const&"),
            ("&mut QString", "QString&"),
            ("Pin<&mut MyObject>", "MyObject&"),
            ("UniquePtr<QColor>", "std::unique_ptr<QColor>"),
            ("SharedPtr<QColor>", "std::shared_ptr<QColor>"),
            ("Box<MyObjectRust>", "rust::Box<MyObjectRust>"),
            ("Vec<i32>", "rust::Vec<std::int32_t>"),
            ("CxxVector<u8>", "std::vector<std::uint8_t>"),
            ("&[u8]", "rust::Slice<std::uint8_t const>"),
            ("&mut [u8]", "rust::Slice<std::uint8_t>"),
            ("[f64; 3]", "std::array<double, 3>"),
            ("fn(i32, &QString) -> bool", "rust::Fn<bool, std::int32_t, QString const&>"),
            ("fn()", "rust::Fn<void>"),
            ("Color", "my_ns::Color"),
            ("ffi::Color", "my_ns::Color"),
            ("QList<i32>", "QList<std::int32_t>"),
        ],
    )
    def test_spelling(self, type_names, rust, cpp):
        assert resolve(rust, type_names) == cpp

    def test_unknown_identifier(self, type_names):
        span = Span("bridge.rs", 3, 5)
        with pytest.raises(TypeResolutionError) as excinfo:
            resolve_cpp_type(parse_type("Mystery"), type_names, span)
        assert excinfo.value.span == span
        assert "Mystery" in str(excinfo.value)

    def test_unknown_nested_identifier(self, type_names):
        with pytest.raises(TypeResolutionError):
            resolve("UniquePtr<Mystery>", type_names)

    def test_unsized_slice(self, type_names):
        with pytest.raises(TypeResolutionError):
            resolve("[u8]", type_names)

    def test_tuple(self, type_names):
        with pytest.raises(TypeResolutionError):
            resolve("(i32, i32)", type_names)

    @pytest.mark.parametrize(
        "rust, cpp",
        [
            ("qobject::MyObject", "MyObject"),
            ("cxx_qt_lib::QString", "QString"),
            ("core::pin::Pin<&mut MyObject>", "MyObject&"),
            ("my_ns::Color", "my_ns::Color"),
        ],
    )
    def test_qualified_paths(self, rust, cpp, type_names):
        assert resolve(rust, type_names) == cpp

    @pytest.mark.parametrize(
        "rust",
        ["other_ns::MyObject", "other_ns::Pin<&mut MyObject>", "UniquePtr<elsewhere::QColor>"],
    )
    def test_unknown_path_prefix(self, rust, type_names):
        with pytest.raises(TypeResolutionError, match="Unknown path"):
            resolve(rust, type_names)


class TestResolveReturnType:
    def test_missing_return_is_void(self, type_names):
        assert resolve_cpp_return_type(None, type_names) == "void"

    def test_result_is_unwrapped(self, type_names):
        assert resolve_cpp_return_type(parse_type("Result<i32>"), type_names) == "std::int32_t"
        assert resolve_cpp_return_type(parse_type("Result<()>"), type_names) == "void"


class TestTypeNames:
    def test_builtins(self):
        names = TypeNames.builtins()
        assert "QString" in names
        assert names.cxx_qualified("QObject") == "QObject"

    def test_from_model(self, bridge_dict):
        model = ParsedModel.from_dict(bridge_dict)
        names = TypeNames.from_model(model)

        assert names.cxx_qualified("MyObject") == "cxx_qt::my_object::MyObject"
        assert names.cxx_qualified("MyObjectRust") == "cxx_qt::my_object::MyObjectRust"
        assert names.cxx_qualified("State") == "cxx_qt::my_object::MyObject::State"
        assert names.cxx_qualified("Mode") == "cxx_qt::my_object::Mode"
        assert names.cxx_qualified("ExternObject") == "external::ExternObject"
        assert names.cxx_qualified("QAbstractItemModel") == "QAbstractItemModel"

    def test_alias_with_namespace(self):
        model = ParsedModel.from_dict(
            {
                "cxx_file_stem": "ffi",
                "types": {"Point": {"cxx_name": "QPointF", "namespace": ""}, "Id": "ids::Id"},
            }
        )
        names = TypeNames.from_model(model)
        assert names.cxx_qualified("Point") == "QPointF"
        assert names.cxx_qualified("Id") == "ids::Id"

    def test_table_is_read_only(self, type_names):
        with pytest.raises(TypeError):
            type_names._entries["Extra"] = None

    def test_unknown_lookup(self, type_names):
        assert type_names.lookup("Nope") is None
        with pytest.raises(TypeResolutionError):
            type_names.cxx_qualified("Nope")
