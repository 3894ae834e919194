"""
Per-Object Assembler.

Runs the constructor generator and every sibling feature generator for
one structured object and merges their blocks, bucket by bucket, in
invocation order:

1. business-object slot (``cxxqttype``)
2. configured feature generators, in ``config.features`` order
3. locking, then threading
4. constructors, receiving the locking and threading member initializers
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ..core.config import GeneratorConfig
from ..core.fragment import GeneratedCppQObjectBlocks
from ..core.generator import GeneratorError
from ..registry import FeatureRegistry, get_registry
from ...logging_config import get_logger
from . import constructor, cxxqttype, locking, threading
from .constructor import EntryPoint
from .descriptor import GenerationContext, ObjectDescriptor
from .structuring import StructuredQObject
from .type_names import TypeNames

logger = get_logger(__name__)


@dataclass
class GeneratedCppQObject:
    """Generated C++ of one object."""

    descriptor: ObjectDescriptor
    blocks: GeneratedCppQObjectBlocks
    entry_points: List[EntryPoint] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def ident(self) -> str:
        return self.descriptor.ident

    @property
    def namespace(self) -> str:
        return self.descriptor.namespace

    @property
    def namespace_internals(self) -> str:
        return self.descriptor.namespace_internals

    @property
    def base_class(self) -> str:
        return self.descriptor.base_class

    @classmethod
    def from_structured(
        cls,
        qobject: StructuredQObject,
        type_names: TypeNames,
        config: GeneratorConfig,
        registry: Optional[FeatureRegistry] = None,
    ) -> "GeneratedCppQObject":
        """
        Generate one object.

        Args:
            qobject: Object with its declarations attached
            type_names: Identifier table of the run
            config: Generator configuration
            registry: Feature registry (the global one when omitted)

        Raises:
            GeneratorError: If any generator fails; nothing is returned for
                the object in that case
        """
        registry = registry or get_registry()
        descriptor = ObjectDescriptor.from_parsed(qobject.declaration, config)
        logger.debug("Generating %s", descriptor.cxx_qualified)

        try:
            lock_guard, lock_initializer, lock_blocks = locking.generate(descriptor)
            context = GenerationContext(descriptor, type_names, lock_guard, config)

            blocks = cxxqttype.generate(descriptor)
            warnings = []
            for feature in registry.generators_for(config):
                blocks.append(feature.generate(qobject, context))
                warnings.extend(feature.warnings(qobject))

            # Members are initialized in declaration order, so the lock member
            # precedes the thread member in both lists
            initializers = []
            blocks.append(lock_blocks)
            if lock_initializer:
                initializers.append(lock_initializer)
            if descriptor.threading:
                thread_initializer, thread_blocks = threading.generate(descriptor)
                blocks.append(thread_blocks)
                initializers.append(thread_initializer)

            constructors = qobject.declaration.constructors
            blocks.append(
                constructor.generate(descriptor, constructors, initializers, type_names)
            )
            entry_points = constructor.entry_points(descriptor, constructors, type_names)
        except GeneratorError as e:
            logger.error("Failed to generate %s: %s", descriptor.ident, e)
            raise

        return cls(descriptor, blocks, entry_points, warnings)
