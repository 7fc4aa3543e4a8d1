"""Record identifiers in the 12-byte ObjectId layout.

An id is 24 lowercase hex characters: a 4-byte big-endian creation time in
seconds, 5 bytes of per-process randomness, and a 3-byte counter.
"""

import itertools
import os
import re
import time
from typing import Final

OBJECT_ID_PATTERN: Final = re.compile(r"[0-9a-fA-F]{24}")

_PROCESS_RANDOM: Final = os.urandom(5)
_COUNTER_MAX: Final = 0xFFFFFF
_counter = itertools.count(int.from_bytes(os.urandom(3), "big"))


def new_object_id(timestamp: float | None = None) -> str:
    """Generate a new 24-character hex id.

    Args:
        timestamp: Creation time in epoch seconds. Defaults to now.
    """
    seconds = int(time.time() if timestamp is None else timestamp) & 0xFFFFFFFF
    count = next(_counter) & _COUNTER_MAX
    raw = seconds.to_bytes(4, "big") + _PROCESS_RANDOM + count.to_bytes(3, "big")
    return raw.hex()


def is_object_id(value: object) -> bool:
    """Whether value is a string shaped like an ObjectId."""
    return isinstance(value, str) and OBJECT_ID_PATTERN.fullmatch(value) is not None

