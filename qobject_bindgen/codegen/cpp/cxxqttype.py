"""
Business-object slot of a generated object.

Every object owns its business object through a ``rust::Box`` member and
exposes it to hand-written C++ through ``unsafeRust``/``unsafeRustMut``.
"""

from ..core.fragment import CppFragment, GeneratedCppQObjectBlocks
from .descriptor import ObjectDescriptor

RUST_OBJ_MEMBER = "m_rustObj"


def generate(descriptor: ObjectDescriptor) -> GeneratedCppQObjectBlocks:
    class_name = descriptor.ident
    rust_ident = descriptor.rust_ident

    return GeneratedCppQObjectBlocks(
        members=[f"rust::Box<{rust_ident}> {RUST_OBJ_MEMBER};"],
        methods=[
            CppFragment.pair(
                f"{rust_ident} const& unsafeRust() const;",
                f"{rust_ident} const&\n"
                f"{class_name}::unsafeRust() const\n"
                "{\n"
                f"  return *{RUST_OBJ_MEMBER};\n"
                "}\n",
            ),
            CppFragment.pair(
                f"{rust_ident}& unsafeRustMut();",
                f"{rust_ident}&\n"
                f"{class_name}::unsafeRustMut()\n"
                "{\n"
                f"  return *{RUST_OBJ_MEMBER};\n"
                "}\n",
            ),
        ],
    )
