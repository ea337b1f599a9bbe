"""seqid: unique sequential IDs and a reservation-keyed map."""

from importlib.metadata import version as _version

__version__ = _version("seqid")

from seqid.generator import (
    FiniteSequential,
    UniqueGenerator,
    Counter,
    AtomicCounter,
    U8,
    U16,
    U32,
    U64,
    U128,
    USize,
    AtomicU8,
    AtomicU16,
    AtomicU32,
    AtomicU64,
    AtomicUSize,
)
from seqid.seqmap import SeqHashMap, Reservation
from seqid.errors import (
    SeqIdError,
    ForeignReservationError,
    KeyCollisionError,
    IdentityExhaustedError,
)

__all__ = [
    "FiniteSequential",
    "UniqueGenerator",
    "Counter",
    "AtomicCounter",
    "U8",
    "U16",
    "U32",
    "U64",
    "U128",
    "USize",
    "AtomicU8",
    "AtomicU16",
    "AtomicU32",
    "AtomicU64",
    "AtomicUSize",
    "SeqHashMap",
    "Reservation",
    "SeqIdError",
    "ForeignReservationError",
    "KeyCollisionError",
    "IdentityExhaustedError",
]
