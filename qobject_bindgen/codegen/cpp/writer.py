"""
Render generated blocks to header and source text.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from ..core.config import GeneratorConfig, load_config
from ..core.fragment import CppFragment, FragmentKind
from ..core.templates import (
    HEADER_TEMPLATE_NAME,
    SOURCE_TEMPLATE_NAME,
    TemplateEngine,
    create_template_engine,
)
from ...logging_config import get_logger
from .blocks import GeneratedCppBlocks
from .externcxxqt import GeneratedCppExternCxxQtBlocks
from .qobject import GeneratedCppQObject

logger = get_logger(__name__)


def split_fragments(fragments: Sequence[CppFragment]) -> Tuple[List[str], List[str]]:
    """Split fragments into header declarations and source definitions."""
    headers = []
    sources = []
    for fragment in fragments:
        if fragment.kind == FragmentKind.PAIR:
            headers.append(fragment.header)
            sources.append(fragment.source)
        elif fragment.kind == FragmentKind.HEADER_ONLY:
            headers.append(fragment.header)
        else:
            raise ValueError(f"Unknown fragment kind: {fragment.kind}")
    return headers, sources


def _in_namespace(namespace: str, text: str) -> str:
    if not namespace:
        return text
    return f"namespace {namespace} {{\n{text}\n}} // namespace {namespace}"


class CppWriter:
    """Renders GeneratedCppBlocks through the header and source templates."""

    def __init__(self, config: Optional[GeneratorConfig] = None,
                 engine: Optional[TemplateEngine] = None):
        self.config = config or load_config()
        template_dir = Path(self.config.template_dir) if self.config.template_dir else None
        self.engine = engine or create_template_engine(template_dir)

    def header_name(self, blocks: GeneratedCppBlocks) -> str:
        return blocks.cxx_file_stem + self.config.header_suffix

    def source_name(self, blocks: GeneratedCppBlocks) -> str:
        return blocks.cxx_file_stem + self.config.source_suffix

    def _qobject_context(self, qobject: GeneratedCppQObject) -> Dict[str, Any]:
        blocks = qobject.blocks
        public, public_sources = split_fragments(blocks.methods)
        private, private_sources = split_fragments(blocks.private_methods)
        return {
            "ident": qobject.ident,
            "namespace": qobject.namespace,
            "base_class": qobject.base_class,
            "qualified": qobject.descriptor.cxx_qualified,
            "forward_declares": blocks.forward_declares,
            "metaobjects": blocks.metaobjects,
            "public": public,
            "private": private,
            "members": blocks.members,
            "deconstructors": blocks.deconstructors,
            "sources": public_sources + private_sources,
        }

    def _extern_context(self, block: GeneratedCppExternCxxQtBlocks) -> Dict[str, Any]:
        headers, sources = split_fragments(block.method)
        return {
            "forward_declares": block.forward_declares,
            "header": _in_namespace(block.namespace, "\n".join(headers)) if headers else "",
            "source": _in_namespace(block.namespace, "\n".join(sources).rstrip("\n"))
            if sources
            else "",
        }

    def _context(self, blocks: GeneratedCppBlocks) -> Dict[str, Any]:
        cxx_header = None
        if self.config.include_cxx_header:
            cxx_header = f'"{blocks.cxx_file_stem}{self.config.cxx_header_suffix}"'
        return {
            "comment": self.config.add_comments,
            "stem": blocks.cxx_file_stem,
            "indent": self.config.indent_size,
            "header_name": self.header_name(blocks),
            "includes": blocks.all_includes,
            "cxx_header": cxx_header,
            "forward_declares": blocks.forward_declares,
            "qobjects": [self._qobject_context(q) for q in blocks.qobjects],
            "extern_blocks": [self._extern_context(b) for b in blocks.extern_cxx_qt],
        }

    def render_header(self, blocks: GeneratedCppBlocks) -> str:
        """Render the header declaring every generated class."""
        return self.engine.render_template(HEADER_TEMPLATE_NAME, self._context(blocks))

    def render_source(self, blocks: GeneratedCppBlocks) -> str:
        """Render the source defining every generated method."""
        return self.engine.render_template(SOURCE_TEMPLATE_NAME, self._context(blocks))

    def write_files(self, blocks: GeneratedCppBlocks,
                    output_dir: Union[str, Path]) -> List[Path]:
        """
        Render and write the header and source into ``output_dir``.

        Returns:
            Paths of the written header and source
        """
        directory = Path(output_dir)
        directory.mkdir(parents=True, exist_ok=True)

        written = []
        for name, text in (
            (self.header_name(blocks), self.render_header(blocks)),
            (self.source_name(blocks), self.render_source(blocks)),
        ):
            path = directory / name
            path.write_text(text, encoding="utf-8")
            logger.info("Wrote %s", path)
            written.append(path)
        return written
