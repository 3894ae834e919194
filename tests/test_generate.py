"""Tests for the top-level generation entry points."""

import json

from qobject_bindgen import generate_from_dict, generate_from_file
from qobject_bindgen.codegen import generate_code
from qobject_bindgen.codegen.core.config import GeneratorConfig
from qobject_bindgen.codegen.core.generator import TypeResolutionError, validate_model
from qobject_bindgen.codegen.core.model import ParsedModel


class TestGenerateCode:
    def test_success(self, bridge_dict):
        result = generate_code(ParsedModel.from_dict(bridge_dict), GeneratorConfig())

        assert result.success
        assert "#pragma once" in result.header
        assert '#include "my_object.cxxqt.h"' in result.source
        assert result.metadata["qobject_count"] == 2
        assert result.metadata["constructor_count"] == 1
        assert result.metadata["header_file"] == "my_object.cxxqt.h"
        assert "<mutex>" in result.metadata["includes"]

    def test_failure_has_no_partial_output(self, bridge_dict):
        bridge_dict["methods"][0]["parameters"][1]["type"] = "&Unknown"
        result = generate_code(ParsedModel.from_dict(bridge_dict), GeneratorConfig())

        assert not result.success
        assert result.header == ""
        assert result.source == ""
        assert isinstance(result.exception, TypeResolutionError)
        assert "Unknown" in result.error_message

    def test_validation_warnings(self, bridge_dict):
        result = generate_code(ParsedModel.from_dict(bridge_dict), GeneratorConfig())
        assert result.warnings == [
            "Object 'Child' declares no constructors; "
            "the default constructor has no initialize hook"
        ]


class TestValidateModel:
    def test_empty_bridge(self):
        assert validate_model(ParsedModel(cxx_file_stem="empty")) == ["Bridge declares no objects"]

    def test_free_enum_outside_qnamespace(self):
        model = ParsedModel.from_dict(
            {
                "cxx_file_stem": "e",
                "qobjects": [{"name": "A", "properties": [{"name": "p", "type": "i32"}]}],
                "qenums": [{"name": "E", "namespace": "ns", "variants": ["X"]}],
            }
        )
        warnings = validate_model(model)
        assert any("namespace 'ns' is not declared" in w for w in warnings)

    def test_object_without_members(self):
        model = ParsedModel.from_dict({"cxx_file_stem": "e", "qobjects": [{"name": "A"}]})
        assert "Object 'A' has no properties, methods or signals" in validate_model(model)


class TestGenerateFromDict:
    def test_dict_config(self, bridge_dict):
        result = generate_from_dict(bridge_dict, {"add_comments": False})

        assert result.success
        assert result.header.startswith("#pragma once")

    def test_invalid_description(self):
        result = generate_from_dict({"namespace": "x"})

        assert not result.success
        assert "cxx_file_stem" in result.error_message

    def test_from_file(self, bridge_dict, tmp_path):
        path = tmp_path / "bridge.json"
        path.write_text(json.dumps(bridge_dict), encoding="utf-8")

        result = generate_from_file(path)

        assert result.success
        assert "class Child : public MyObject" in result.header

    def test_malformed_span_is_a_failed_result(self):
        result = generate_from_dict(
            {"cxx_file_stem": "x", "qobjects": [{"name": "A", "span": {"line": "ten"}}]}
        )

        assert not result.success
        assert "span line" in result.error_message

    def test_malformed_constructor_is_a_failed_result(self):
        result = generate_from_dict(
            {"cxx_file_stem": "x", "qobjects": [{"name": "A", "constructors": ["i32"]}]}
        )

        assert not result.success
        assert "constructor" in result.error_message
