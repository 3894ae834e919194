"""
Signals and their ``...Connect`` helpers.

The helper lets the business-logic side connect a closure to a signal; the
closure runs under the object's lock. Signals inherited from the base class
only get the helper, since the base class already declares them.
"""

from typing import List, Sequence

from ..core.fragment import CppFragment, CppNamedType, GeneratedCppQObjectBlocks, join_arguments
from ..core.generator import FeatureGenerator
from ..core.naming import cpp_method_name
from ...logging_config import get_logger
from .descriptor import GenerationContext
from .params import get_cpp_params
from .structuring import StructuredQObject

logger = get_logger(__name__)

CONNECTION_INCLUDE = '"cxx-qt-lib/qmetaobjectconnection.h"'


def connect_function_type(self_type: str, params: Sequence[CppNamedType]) -> str:
    """``rust::Fn`` receiving the object and the signal's arguments."""
    return "rust::Fn<" + ", ".join(["void", f"{self_type}&"] + [p.ty for p in params]) + ">"


def connect_body(sender: str, signal_pointer: str, receiver: str,
                 params: Sequence[CppNamedType],
                 guard: List[str]) -> str:
    """Body of a connect helper forwarding ``signal_pointer`` to ``func``."""
    moved = ", ".join([receiver] + [f"std::move({p.ident})" for p in params])
    lambda_lines = "".join(f"      {line}\n" for line in guard + [f"func({moved});"])
    return (
        "{\n"
        "  return QObject::connect(\n"
        f"    {sender},\n"
        f"    {signal_pointer},\n"
        f"    {sender},\n"
        f"    [&, func = std::move(func)]({join_arguments(params)}) {{\n"
        f"{lambda_lines}"
        "    },\n"
        "    type);\n"
        "}\n"
    )


class SignalGenerator(FeatureGenerator):
    """``Q_SIGNAL`` declarations and connect helpers for an object."""

    @property
    def feature_name(self) -> str:
        return "signal"

    @property
    def description(self) -> str:
        return "Q_SIGNAL declarations with ...Connect helpers"

    def generate(self, qobject: StructuredQObject,
                 context: GenerationContext) -> GeneratedCppQObjectBlocks:
        blocks = GeneratedCppQObjectBlocks()
        descriptor = context.descriptor
        class_name = descriptor.ident

        for signal in qobject.signals:
            signature = signal.signature
            params = get_cpp_params(signature, context.type_names)
            ident = cpp_method_name(signature.name, signature.cxx_name)
            connect = f"{ident}Connect"
            owner = descriptor.base_class if signal.inherit else class_name
            logger.debug("%s: signal %s", class_name, ident)

            if not signal.inherit:
                blocks.methods.append(
                    CppFragment.header_only(f"Q_SIGNAL void {ident}({join_arguments(params)});")
                )

            connect_params = (
                f"{connect_function_type(class_name, params)} func, "
                "Qt::ConnectionType type"
            )
            blocks.methods.append(
                CppFragment.pair(
                    f"QMetaObject::Connection {connect}({connect_params});",
                    "QMetaObject::Connection\n"
                    f"{class_name}::{connect}({connect_params})\n"
                    + connect_body(
                        "this", f"&{owner}::{ident}", "*this", params, context.guarded()
                    ),
                )
            )

        if qobject.signals:
            blocks.includes.add(CONNECTION_INCLUDE)

        return blocks
