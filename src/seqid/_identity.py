"""Process-wide allocation of SeqHashMap identities.

Every map gets an identity from one shared counter. Identities are never
reused, so the number of maps a process can ever create is bounded by the
counter's width.
"""

import logging
import threading

from seqid.generator import USize

logger = logging.getLogger("seqid.identity")

_lock = threading.Lock()
_counter = USize()
_exhaustion_logged = False


def allocate() -> int | None:
    """Return a fresh identity, or None if the identity space is used up."""
    global _exhaustion_logged
    with _lock:
        uid = _counter.next()
        first_exhaustion = uid is None and not _exhaustion_logged
        if first_exhaustion:
            _exhaustion_logged = True
    if first_exhaustion:
        logger.warning("Map identity space exhausted (%d-bit)", _counter.width)
    return uid
