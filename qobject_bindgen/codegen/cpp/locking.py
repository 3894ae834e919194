"""
Recursive mutex guarding access to the business object.
"""

from typing import Optional, Tuple

from ..core.fragment import GeneratedCppQObjectBlocks
from .descriptor import ObjectDescriptor

MUTEX_MEMBER = "m_rustObjMutex"
LOCK_GUARD = f"const std::lock_guard<std::recursive_mutex> guard(*{MUTEX_MEMBER});"


def generate(
    descriptor: ObjectDescriptor,
) -> Tuple[Optional[str], Optional[str], GeneratedCppQObjectBlocks]:
    """
    Generate the locking members of an object.

    Returns:
        ``(lock_guard, member_initializer, blocks)``; all empty when the
        object opted out of locking
    """
    if not descriptor.locking:
        return None, None, GeneratedCppQObjectBlocks()

    blocks = GeneratedCppQObjectBlocks(
        members=[f"std::shared_ptr<std::recursive_mutex> {MUTEX_MEMBER};"],
        includes={"<memory>", "<mutex>"},
    )
    initializer = f"{MUTEX_MEMBER}(std::make_shared<std::recursive_mutex>())"
    return LOCK_GUARD, initializer, blocks
