"""
Per-object naming and the context handed to every generator call.
"""

from dataclasses import dataclass
from typing import List, Optional, TYPE_CHECKING

from ..core.naming import qualify, to_snake_case

if TYPE_CHECKING:
    from ..core.config import GeneratorConfig
    from ..core.model import ParsedQObject
    from .type_names import TypeNames


@dataclass(frozen=True)
class ObjectDescriptor:
    """Immutable naming facts about one generated object."""

    ident: str
    rust_ident: str
    namespace: str
    namespace_internals: str
    base_class: str
    threading: bool = False
    locking: bool = True

    @property
    def cxx_qualified(self) -> str:
        """``ns::Name`` (or ``Name`` in the root namespace)."""
        return qualify(self.namespace, self.ident)

    @property
    def rust_qualified(self) -> str:
        """Business object type as declared by the bridge."""
        return qualify(self.namespace, self.rust_ident)

    def internal(self, symbol: str) -> str:
        """Qualify a generated helper symbol with the internals namespace."""
        return qualify(self.namespace_internals, symbol)

    @classmethod
    def from_parsed(
        cls, qobject: "ParsedQObject", config: "GeneratorConfig"
    ) -> "ObjectDescriptor":
        """Derive the descriptor of a parsed object.

        Helper functions live in ``<namespace>::<prefix><snake name>``; the
        root namespace gets ``<prefix><snake name>``.
        """
        internals = config.internals_prefix + to_snake_case(qobject.name)
        return cls(
            ident=qobject.name,
            rust_ident=qobject.rust_type,
            namespace=qobject.namespace,
            namespace_internals=qualify(qobject.namespace, internals),
            base_class=qobject.base_class or config.default_base_class,
            threading=qobject.threading,
            locking=qobject.locking,
        )


@dataclass(frozen=True)
class GenerationContext:
    """Read-only inputs shared by the feature generators of one object."""

    descriptor: ObjectDescriptor
    type_names: "TypeNames"
    lock_guard: Optional[str] = None
    config: Optional["GeneratorConfig"] = None

    def guarded(self, *statements: str) -> List[str]:
        """Statements preceded by the lock guard line when locking."""
        lines = [self.lock_guard] if self.lock_guard else []
        lines.extend(statements)
        return lines

    def body(self, *statements: str) -> str:
        """Function body running ``statements`` under the lock guard."""
        return "{\n" + "".join(f"  {line}\n" for line in self.guarded(*statements)) + "}\n"
