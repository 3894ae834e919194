"""
Namespaces registered with the meta-object system.
"""

from typing import Set


def generate(namespace: str, includes: Set[str]) -> str:
    """Return the ``Q_NAMESPACE`` declaration and record its include."""
    includes.add("<QtCore/QObject>")
    return f"namespace {namespace} {{\nQ_NAMESPACE\n}} // namespace {namespace}"
