"""
Base generator interface and error types for C++ generation.

Defines the contract every sibling feature generator implements, the
errors a generation run can raise, and the result container returned by
``generate_code``.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Any, Optional, TYPE_CHECKING

from ...logging_config import get_logger

if TYPE_CHECKING:
    from .config import GeneratorConfig
    from .fragment import GeneratedCppQObjectBlocks
    from .model import ParsedModel, Span
    from ..cpp.descriptor import GenerationContext
    from ..cpp.structuring import StructuredQObject

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors.

    Carries an optional source location so the front end can attach a
    precise diagnostic.
    """

    def __init__(self, message: str, span: Optional["Span"] = None):
        super().__init__(message)
        self.message = message
        self.span = span

    def __str__(self) -> str:
        if self.span is not None:
            return f"{self.span}: {self.message}"
        return self.message


class TypeResolutionError(GeneratorError):
    """A declared parameter or return type has no known C++ spelling."""

    pass


class UnsupportedPatternError(GeneratorError):
    """A parameter is not a single bound name."""

    pass


class StructuringError(GeneratorError):
    """Declarations reference objects that do not exist or are inconsistent."""

    pass


class ModelError(GeneratorError):
    """The structured input document is malformed."""

    pass


class FeatureGenerator(ABC):
    """Abstract base class for per-object feature generators.

    A feature generator turns one aspect of a structured object (its
    properties, methods, signals, ...) into fragments appended to the
    object's bundle. Generators must not keep state between calls.
    """

    @property
    @abstractmethod
    def feature_name(self) -> str:
        """Return the registry name of the feature (e.g. 'property')."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Return a one line description of what the feature emits."""
        pass

    @abstractmethod
    def generate(
        self, qobject: "StructuredQObject", context: "GenerationContext"
    ) -> "GeneratedCppQObjectBlocks":
        """
        Generate the fragments of this feature for one object.

        Args:
            qobject: Object with its methods, signals and enums attached
            context: Descriptor, type names and lock guard of the object

        Returns:
            Blocks holding only this feature's fragments
        """
        pass

    def warnings(self, qobject: "StructuredQObject") -> List[str]:
        """Return feature specific warnings for an object (empty by default)."""
        return []


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        header: str,
        source: str,
        warnings: List[str] = None,
        metadata: Dict[str, Any] = None,
        blocks: Any = None,
    ):
        """
        Initialize generation result.

        Args:
            header: Rendered header text
            source: Rendered source text
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
            blocks: The GeneratedCppBlocks the text was rendered from
        """
        self.header = header
        self.source = source
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.blocks = blocks
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(header="", source="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def validate_model(model: "ParsedModel") -> List[str]:
    """
    Check a model for suspicious but legal shapes.

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []

    owned = {m.self_ident for m in model.methods} | {
        s.self_ident for s in model.signals
    }
    for qobject in model.qobjects:
        if not qobject.properties and qobject.name not in owned:
            warnings.append(
                f"Object '{qobject.name}' has no properties, methods or signals"
            )
        if not qobject.constructors:
            warnings.append(
                f"Object '{qobject.name}' declares no constructors; "
                f"the default constructor has no initialize hook"
            )

    for qenum in model.qenums:
        if qenum.qobject is None and qenum.namespace and (
            qenum.namespace not in model.qnamespaces
        ):
            warnings.append(
                f"Enum '{qenum.name}' uses Q_ENUM_NS but namespace "
                f"'{qenum.namespace}' is not declared as a qnamespace"
            )

    if not model.qobjects and not model.extern_cxxqt_blocks:
        warnings.append("Bridge declares no objects")

    return warnings


def generate_code(
    model: "ParsedModel", config: Optional["GeneratorConfig"] = None
) -> GenerationResult:
    """
    Generate and render C++ for a model with error handling.

    Args:
        model: Structured input model
        config: Generator configuration (defaults when omitted)

    Returns:
        GenerationResult with header, source, warnings, and metadata
    """
    from .config import load_config
    from .templates import TemplateError
    from ..cpp import GeneratedCppBlocks
    from ..cpp.writer import CppWriter
    from ..registry import RegistryError

    config = config or load_config()

    try:
        warnings = validate_model(model)

        blocks = GeneratedCppBlocks.from_model(model, config)
        warnings.extend(blocks.warnings)

        writer = CppWriter(config)
        header = writer.render_header(blocks)
        source = writer.render_source(blocks)

        metadata = {
            "cxx_file_stem": blocks.cxx_file_stem,
            "header_file": blocks.cxx_file_stem + config.header_suffix,
            "source_file": blocks.cxx_file_stem + config.source_suffix,
            "qobject_count": len(blocks.qobjects),
            "extern_block_count": len(blocks.extern_cxx_qt),
            "constructor_count": sum(
                len(q.constructors) for q in model.qobjects
            ),
            "includes": blocks.all_includes,
        }

        return GenerationResult(header, source, warnings, metadata, blocks)

    except (GeneratorError, TemplateError, RegistryError) as e:
        logger.error("Code generation failed: %s", e)
        return GenerationResult.error(f"Code generation failed: {e}", exception=e)
