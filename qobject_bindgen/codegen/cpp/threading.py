"""
Thread helper of objects that queue work onto their owning thread.

The guarded pointer is shared with every ``CxxQtThread`` handed out by
``qtThread()``; the destructor clears it so queued work can detect that
the object is gone.
"""

from typing import Tuple

from ..core.fragment import CppFragment, GeneratedCppQObjectBlocks
from .descriptor import ObjectDescriptor
from .locking import MUTEX_MEMBER

THREAD_MEMBER = "m_cxxQtThreadObj"


def generate(descriptor: ObjectDescriptor) -> Tuple[str, GeneratedCppQObjectBlocks]:
    """Return the member initializer and the blocks of the thread helper."""
    class_name = descriptor.ident
    thread_alias = f"{class_name}CxxQtThread"
    guarded_pointer = f"rust::cxxqt1::CxxQtGuardedPointer<{class_name}>"

    blocks = GeneratedCppQObjectBlocks(
        forward_declares=[
            f"using {thread_alias} = rust::cxxqt1::CxxQtThread<{class_name}>;"
        ],
        members=[f"std::shared_ptr<{guarded_pointer}> {THREAD_MEMBER};"],
        methods=[
            CppFragment.pair(
                f"{thread_alias} qtThread() const;",
                f"{thread_alias}\n"
                f"{class_name}::qtThread() const\n"
                "{\n"
                f"  return {thread_alias}({THREAD_MEMBER}, {MUTEX_MEMBER});\n"
                "}\n",
            )
        ],
        deconstructors=[
            f"const auto guard = std::unique_lock({THREAD_MEMBER}->mutex);",
            f"{THREAD_MEMBER}->ptr = nullptr;",
        ],
        includes={'"cxx-qt-common/cxxqt_thread.h"'},
    )
    initializer = f"{THREAD_MEMBER}(std::make_shared<{guarded_pointer}>(this))"
    return initializer, blocks
