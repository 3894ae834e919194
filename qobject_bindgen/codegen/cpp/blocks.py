"""
Top-Level Assembler.

Combines the generated objects of a bridge with the declarations that
belong to no object (namespaces, free enums) and the glue for extern
framework objects.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Set

from ..core.config import GeneratorConfig, load_config
from ..core.model import ParsedModel
from ..registry import FeatureRegistry
from ...logging_config import get_logger
from . import externcxxqt, qenum, qnamespace
from .externcxxqt import GeneratedCppExternCxxQtBlocks
from .qobject import GeneratedCppQObject
from .structuring import Structures
from .type_names import TypeNames

logger = get_logger(__name__)


@dataclass
class GeneratedCppBlocks:
    """Generated C++ for all objects of one bridge."""

    cxx_file_stem: str
    forward_declares: List[str] = field(default_factory=list)
    includes: Set[str] = field(default_factory=set)
    qobjects: List[GeneratedCppQObject] = field(default_factory=list)
    extern_cxx_qt: List[GeneratedCppExternCxxQtBlocks] = field(default_factory=list)

    @property
    def warnings(self) -> List[str]:
        return [warning for qobject in self.qobjects for warning in qobject.warnings]

    @property
    def all_includes(self) -> List[str]:
        """Every include the rendered header needs, sorted."""
        includes = set(self.includes)
        for qobject in self.qobjects:
            includes.update(qobject.blocks.includes)
        for block in self.extern_cxx_qt:
            includes.update(block.includes)
        return sorted(includes)

    @classmethod
    def from_model(
        cls,
        model: ParsedModel,
        config: Optional[GeneratorConfig] = None,
        registry: Optional[FeatureRegistry] = None,
    ) -> "GeneratedCppBlocks":
        """
        Generate the C++ blocks of a whole bridge.

        Raises:
            StructuringError: If declarations reference unknown objects
            TypeResolutionError: If a type has no C++ spelling
            UnsupportedPatternError: If a parameter is not a plain name
        """
        config = config or load_config()
        structures = Structures(model)
        type_names = TypeNames.from_model(model)

        includes: Set[str] = set(model.includes)

        forward_declares = [
            qnamespace.generate(namespace, includes) for namespace in model.qnamespaces
        ]
        for free_qenum in structures.free_qenums:
            declaration, enum_includes = qenum.generate_declaration(free_qenum, type_names)
            forward_declares.append(declaration)
            includes.update(enum_includes)

        qobjects = [
            GeneratedCppQObject.from_structured(structured, type_names, config, registry)
            for structured in structures.qobjects
        ]

        extern_cxx_qt = externcxxqt.generate(
            model.extern_cxxqt_blocks, type_names, config
        )

        logger.info(
            "Generated %d object(s) and %d extern block(s) for '%s'",
            len(qobjects),
            len(extern_cxx_qt),
            model.cxx_file_stem,
        )

        return cls(
            cxx_file_stem=model.cxx_file_stem,
            forward_declares=forward_declares,
            includes=includes,
            qobjects=qobjects,
            extern_cxx_qt=extern_cxx_qt,
        )
