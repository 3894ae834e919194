"""Tests for converting bridge descriptions into ParsedModel."""

import pytest

from qobject_bindgen.codegen.core.generator import ModelError
from qobject_bindgen.codegen.core.model import EnumVariant, ParsedModel, Span
from qobject_bindgen.codegen.core.types import TypeParseError


class TestFromDict:
    def test_full_bridge(self, bridge_dict):
        model = ParsedModel.from_dict(bridge_dict, "my_object.json")

        assert model.cxx_file_stem == "my_object"
        assert [q.name for q in model.qobjects] == ["MyObject", "Child"]
        assert len(model.methods) == 2
        assert len(model.signals) == 2
        assert model.qnamespaces == ["cxx_qt::my_object"]
        assert model.includes == ["<QtCore/QAbstractItemModel>"]
        assert model.type_aliases == {"QAbstractItemModel": "QAbstractItemModel"}

    def test_object_defaults(self, bridge_dict):
        child = ParsedModel.from_dict(bridge_dict).qobjects[1]

        assert child.rust_type == "ChildRust"
        assert child.namespace == "cxx_qt::my_object"
        assert child.threading is False
        assert child.locking is False
        assert child.constructors == ()

    def test_constructor(self, bridge_dict):
        ctor = ParsedModel.from_dict(bridge_dict).qobjects[0].constructors[0]

        assert [str(t) for t in ctor.arguments] == ["i32", "&QString"]
        assert [str(t) for t in ctor.base_arguments] == ["*mut QObject"]
        assert ctor.imp == "impl cxx_qt::Constructor<(i32, QString)> for MyObject"

    def test_span(self, bridge_dict):
        model = ParsedModel.from_dict(bridge_dict)
        assert model.qobjects[0].span == Span("src/lib.rs", 10, 9)
        assert str(model.qobjects[0].span) == "src/lib.rs:10:9"

    def test_span_without_file_uses_source(self):
        model = ParsedModel.from_dict(
            {"cxx_file_stem": "a", "qobjects": [{"name": "A", "span": {"line": 2}}]},
            "bridge.json",
        )
        assert model.qobjects[0].span == Span("bridge.json", 2, 0)

    def test_signatures(self, bridge_dict):
        model = ParsedModel.from_dict(bridge_dict)
        say_hi, compute = model.methods

        assert say_hi.is_qinvokable
        assert say_hi.self_ident == "MyObject"
        assert say_hi.signature.is_mutable
        assert compute.self_ident == "Child"
        assert not compute.signature.is_mutable
        assert str(compute.signature.returns) == "f64"
        assert model.signals[1].inherit

    def test_enums(self, bridge_dict):
        state, mode = ParsedModel.from_dict(bridge_dict).qenums

        assert state.qobject == "MyObject"
        assert state.variants == (EnumVariant("Idle"), EnumVariant("Running", 5))
        assert mode.qobject is None
        assert mode.namespace == "cxx_qt::my_object"

    def test_extern_block(self, bridge_dict):
        [block] = ParsedModel.from_dict(bridge_dict).extern_cxxqt_blocks

        assert block.namespace == "external"
        assert block.qobjects[0].namespace == "external"
        assert block.signals[0].self_ident == "ExternObject"

    def test_pattern_parameter(self):
        model = ParsedModel.from_dict(
            {
                "cxx_file_stem": "a",
                "methods": [
                    {
                        "name": "m",
                        "parameters": [{"pattern": "(x, y)", "type": "(i32, i32)"}],
                    }
                ],
            }
        )
        parameter = model.methods[0].signature.parameters[0]
        assert parameter.pattern == "(x, y)"
        assert not parameter.is_ident


class TestFromDictErrors:
    def test_not_an_object(self):
        with pytest.raises(ModelError):
            ParsedModel.from_dict([])

    def test_missing_stem(self):
        with pytest.raises(ModelError, match="cxx_file_stem"):
            ParsedModel.from_dict({"qobjects": []})

    def test_missing_object_name(self):
        with pytest.raises(ModelError, match="missing 'name'"):
            ParsedModel.from_dict({"cxx_file_stem": "a", "qobjects": [{"base_class": "X"}]})

    def test_parameter_without_name_or_pattern(self):
        with pytest.raises(ModelError):
            ParsedModel.from_dict(
                {"cxx_file_stem": "a", "methods": [{"name": "m", "parameters": [{"type": "i32"}]}]}
            )

    def test_bad_type(self):
        with pytest.raises(TypeParseError):
            ParsedModel.from_dict(
                {
                    "cxx_file_stem": "a",
                    "qobjects": [{"name": "A", "properties": [{"name": "p", "type": "Vec<"}]}],
                }
            )

    def test_bad_aliases(self):
        with pytest.raises(ModelError):
            ParsedModel.from_dict({"cxx_file_stem": "a", "types": ["QString"]})

    @pytest.mark.parametrize(
        "bridge, message",
        [
            ({"qobjects": [{"name": "A", "span": {"line": "ten"}}]}, "span line"),
            ({"qobjects": [{"name": "A", "span": {"column": None}}]}, "span column"),
            ({"qobjects": [{"name": "A", "constructors": ["i32"]}]}, "constructor"),
            ({"qobjects": [{"name": "A", "constructors": [{"arguments": [1]}]}]}, "string"),
            ({"qobjects": ["A"]}, "qobject"),
            ({"qobjects": {"name": "A"}}, "must be a list"),
            ({"qobjects": [{"name": 3}]}, "must be a string"),
            ({"methods": [{"name": "m", "parameters": ["i32"]}]}, "parameter"),
            ({"qenums": [{"name": "E", "variants": [{"name": "X", "value": "big"}]}]}, "value"),
            ({"qenums": [{"name": "E", "variants": "X"}]}, "must be a list"),
            ({"extern_cxxqt_blocks": [None]}, "extern block"),
            ({"includes": [1]}, "must hold strings"),
        ],
    )
    def test_malformed_shapes(self, bridge, message):
        with pytest.raises(ModelError, match=message):
            ParsedModel.from_dict({"cxx_file_stem": "a", **bridge})
