"""
Structuring step: attach free-standing declarations to their objects.

Methods, signals and inherited methods are declared next to the objects
and name their owner only through the ``self`` receiver; enums name it
explicitly. ``Structures`` groups them per object, checks that every
owner exists, and orders objects so a base class defined in the same
bridge comes before the objects deriving from it.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..core.generator import StructuringError
from ..core.model import (
    ParsedInheritedMethod,
    ParsedMethod,
    ParsedModel,
    ParsedQEnum,
    ParsedQObject,
    ParsedSignal,
    ParsedSignature,
)
from ...logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class StructuredQObject:
    """An object together with everything declared for it."""

    declaration: ParsedQObject
    methods: List[ParsedMethod] = field(default_factory=list)
    signals: List[ParsedSignal] = field(default_factory=list)
    inherited_methods: List[ParsedInheritedMethod] = field(default_factory=list)
    qenums: List[ParsedQEnum] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.declaration.name


class Structures:
    """Objects of a model with their declarations attached."""

    def __init__(self, model: ParsedModel):
        self.qobjects: List[StructuredQObject] = []
        self.free_qenums: List[ParsedQEnum] = []

        by_name: Dict[str, StructuredQObject] = {}
        for qobject in model.qobjects:
            if qobject.name in by_name:
                raise StructuringError(
                    f"Object '{qobject.name}' is declared more than once", qobject.span
                )
            if qobject.threading and not qobject.locking:
                raise StructuringError(
                    f"Object '{qobject.name}' enables threading without locking",
                    qobject.span,
                )
            by_name[qobject.name] = StructuredQObject(qobject)

        for method in model.methods:
            self._owner(by_name, method.signature, "Method").methods.append(method)
        for signal in model.signals:
            self._owner(by_name, signal.signature, "Signal").signals.append(signal)
        for inherited in model.inherited_methods:
            self._owner(
                by_name, inherited.signature, "Inherited method"
            ).inherited_methods.append(inherited)

        for qenum in model.qenums:
            if qenum.qobject is None:
                if not qenum.namespace:
                    raise StructuringError(
                        f"Enum '{qenum.name}' is not owned by an object "
                        "and needs a namespace",
                        qenum.span,
                    )
                self.free_qenums.append(qenum)
                continue
            owner = by_name.get(qenum.qobject)
            if owner is None:
                raise StructuringError(
                    f"No object named '{qenum.qobject}' for enum '{qenum.name}'",
                    qenum.span,
                )
            owner.qenums.append(qenum)

        order = _generation_order(by_name)
        self.qobjects = [by_name[name] for name in order]
        logger.debug("Structured objects in order: %s", ", ".join(order))

    def qobject(self, name: str) -> Optional[StructuredQObject]:
        for structured in self.qobjects:
            if structured.name == name:
                return structured
        return None

    @staticmethod
    def _owner(by_name: Dict[str, StructuredQObject], signature: ParsedSignature,
               what: str) -> StructuredQObject:
        ident = signature.self_ident
        if ident is None:
            raise StructuringError(
                f"{what} '{signature.name}' has no self receiver", signature.span
            )
        owner = by_name.get(ident)
        if owner is None:
            raise StructuringError(
                f"No object named '{ident}' for {what.lower()} '{signature.name}'",
                signature.span,
            )
        return owner


def _generation_order(by_name: Dict[str, StructuredQObject]) -> List[str]:
    """
    Order objects so that base classes from the same bridge come first.

    Objects keep their declaration order otherwise.
    """
    visited = set()
    visiting = set()
    ordered = []

    def visit(name: str):
        if name in visited or name not in by_name:
            return

        qobject = by_name[name].declaration
        if name in visiting:
            raise StructuringError(
                f"Object '{name}' inherits from itself", qobject.span
            )

        visiting.add(name)
        if qobject.base_class:
            visit(qobject.base_class)
        visiting.remove(name)

        visited.add(name)
        ordered.append(name)

    for name in by_name:
        visit(name)

    return ordered
