"""Tests for the parameter extractor."""

import pytest

from qobject_bindgen.codegen.core.fragment import CppNamedType
from qobject_bindgen.codegen.core.generator import TypeResolutionError, UnsupportedPatternError
from qobject_bindgen.codegen.core.model import ParsedParameter, ParsedSignature, Span
from qobject_bindgen.codegen.core.types import parse_type
from qobject_bindgen.codegen.cpp.params import get_cpp_params


def signature(*parameters, span=None):
    return ParsedSignature(name="test", parameters=tuple(parameters), span=span)


def param(name, ty, pattern=None):
    if pattern is not None:
        return ParsedParameter(ty=parse_type(ty), pattern=pattern)
    return ParsedParameter(ty=parse_type(ty), name=name)


class TestGetCppParams:
    def test_receiver_is_dropped(self, type_names):
        params = get_cpp_params(
            signature(
                param("self", "Pin<&mut MyObject>"),
                param("value", "i32"),
                param("text", "&QString"),
            ),
            type_names,
        )

        assert params == [
            CppNamedType("value", "std::int32_t"),
            CppNamedType("text", "QString const&"),
        ]

    def test_free_function(self, type_names):
        params = get_cpp_params(signature(param("a", "bool"), param("b", "f64")), type_names)
        assert [str(p) for p in params] == ["bool a", "double b"]

    def test_receiver_only(self, type_names):
        assert get_cpp_params(signature(param("self", "&MyObject")), type_names) == []

    def test_destructuring_pattern_is_rejected(self, type_names):
        span = Span("src/lib.rs", 4, 12)
        sig = signature(
            param("self", "&MyObject"),
            ParsedParameter(ty=parse_type("(i32, i32)"), pattern="(a, b)", span=span),
        )

        with pytest.raises(UnsupportedPatternError) as excinfo:
            get_cpp_params(sig, type_names)

        assert excinfo.value.span == span
        assert str(excinfo.value).startswith("src/lib.rs:4:12: ")

    def test_wildcard_is_rejected(self, type_names):
        with pytest.raises(UnsupportedPatternError):
            get_cpp_params(signature(param(None, "i32", pattern="_")), type_names)

    def test_unknown_type(self, type_names):
        span = Span("src/lib.rs", 7, 1)
        with pytest.raises(TypeResolutionError) as excinfo:
            get_cpp_params(signature(param("x", "NotAType"), span=span), type_names)
        assert excinfo.value.span == span
