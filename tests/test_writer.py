"""Tests for rendering generated blocks to header and source files."""

import pytest

from qobject_bindgen.codegen.core.config import GeneratorConfig
from qobject_bindgen.codegen.core.fragment import CppFragment
from qobject_bindgen.codegen.core.model import ParsedModel
from qobject_bindgen.codegen.core.templates import TemplateError, create_template_engine
from qobject_bindgen.codegen.cpp.blocks import GeneratedCppBlocks
from qobject_bindgen.codegen.cpp.writer import CppWriter, split_fragments


@pytest.fixture
def blocks(bridge_dict, config):
    return GeneratedCppBlocks.from_model(ParsedModel.from_dict(bridge_dict), config)


class TestSplitFragments:
    def test_split(self):
        headers, sources = split_fragments(
            [
                CppFragment.pair("void a();", "void\nX::a()\n{\n}\n"),
                CppFragment.header_only("Q_SIGNAL void b();"),
            ]
        )
        assert headers == ["void a();", "Q_SIGNAL void b();"]
        assert sources == ["void\nX::a()\n{\n}\n"]

    def test_pair_requires_source(self):
        with pytest.raises(ValueError):
            CppFragment.pair("void a();", None)


class TestHeader:
    def test_layout(self, blocks, config):
        header = CppWriter(config).render_header(blocks)

        assert header.startswith('// Generated by qobject-bindgen from the "my_object" bridge.')
        assert "#pragma once\n" in header
        assert "#include <mutex>\n" in header
        assert '#include "my_object.cxx.h"\n' in header
        assert "class MyObject : public QAbstractItemModel\n{\n  Q_OBJECT\n" in header
        assert "  ~MyObject();\n" in header
        assert "  rust::Box<MyObjectRust> m_rustObj;\n" in header
        assert "Q_DECLARE_METATYPE(cxx_qt::my_object::MyObject*)\n" in header
        assert "namespace rust::cxxqtgen1 {\n" in header

    def test_declaration_order(self, blocks, config):
        header = CppWriter(config).render_header(blocks)

        assert header.index("Q_NAMESPACE") < header.index("Q_ENUM_NS(Mode)")
        assert header.index("Q_ENUM_NS(Mode)") < header.index("class MyObject;")
        assert header.index("using MyObjectCxxQtThread") < header.index('#include "my_object.cxx.h"')
        assert header.index("class MyObject : public") < header.index("class Child : public MyObject")

    def test_public_and_private_sections(self, blocks, config):
        header = CppWriter(config).render_header(blocks)
        public = header.index("public:\n", header.index("class MyObject : public"))
        private = header.index("private:\n", public)

        assert public < header.index("  Q_INVOKABLE void sayHi(") < private
        assert private < header.index("  explicit MyObject(cxx_qt::my_object::cxx_qt_my_object::")

    def test_enum_inside_class(self, blocks, config):
        header = CppWriter(config).render_header(blocks)
        assert "  enum class State : std::int32_t\n  {\n    Idle,\n    Running = 5\n  };\n" in header
        assert "  Q_ENUM(State)\n" in header

    def test_without_comments_or_cxx_header(self, blocks):
        config = GeneratorConfig(add_comments=False, include_cxx_header=False)
        header = CppWriter(config).render_header(blocks)

        assert header.startswith("#pragma once\n")
        assert ".cxx.h" not in header


class TestSource:
    def test_layout(self, blocks, config):
        source = CppWriter(config).render_source(blocks)

        assert '#include "my_object.cxxqt.h"\n' in source
        assert "MyObject::~MyObject()\n{\n  const auto guard" in source
        assert "Child::~Child()\n{\n}\n" in source
        assert "MyObject::MyObject(std::int32_t arg0, QString const& arg1)\n" in source
        assert "ExternObject_triggeredConnect(external::ExternObject& self" in source

    def test_header_only_fragments_are_not_defined(self, blocks, config):
        source = CppWriter(config).render_source(blocks)
        assert "Q_SIGNAL" not in source
        assert "Wrapper() const noexcept" not in source

    def test_deterministic(self, blocks, config):
        writer = CppWriter(config)
        assert writer.render_source(blocks) == writer.render_source(blocks)
        assert writer.render_header(blocks) == writer.render_header(blocks)


class TestWriteFiles:
    def test_writes_header_and_source(self, blocks, config, tmp_path):
        writer = CppWriter(config)
        paths = writer.write_files(blocks, tmp_path / "out")

        assert [p.name for p in paths] == ["my_object.cxxqt.h", "my_object.cxxqt.cpp"]
        assert paths[0].read_text(encoding="utf-8") == writer.render_header(blocks)
        assert paths[1].read_text(encoding="utf-8") == writer.render_source(blocks)

    def test_custom_suffixes(self, blocks, tmp_path):
        config = GeneratorConfig(header_suffix=".h", source_suffix=".cpp")
        paths = CppWriter(config).write_files(blocks, tmp_path)
        assert [p.name for p in paths] == ["my_object.h", "my_object.cpp"]

    def test_template_dir_overrides_header(self, blocks, tmp_path):
        (tmp_path / "header.h.j2").write_text("// {{ stem }}: {{ qobjects | length }}\n")
        writer = CppWriter(GeneratorConfig(template_dir=str(tmp_path)))

        assert writer.render_header(blocks) == "// my_object: 2\n"
        assert writer.render_source(blocks).startswith("// Generated by qobject-bindgen")


class TestTemplateEngine:
    def test_builtin_templates_exist(self):
        engine = create_template_engine()
        assert engine.template_exists("header.h.j2")
        assert engine.template_exists("source.cpp.j2")
        assert not engine.template_exists("missing.j2")

    def test_filters(self):
        engine = create_template_engine()
        rendered = engine.render_string(
            "{{ text | indent(4) }}\n{{ note | comment }}",
            {"text": "a\n\nb", "note": "one\ntwo"},
        )
        assert rendered == "    a\n\n    b\n// one\n// two"

    def test_add_template(self):
        engine = create_template_engine()
        engine.add_template("extra.j2", "{{ name }}();")
        assert engine.render_template("extra.j2", {"name": "run"}) == "run();"

    def test_undefined_variable(self):
        with pytest.raises(TemplateError):
            create_template_engine().render_string("{{ missing }}", {})
