"""SeqHashMap: a dict whose keys come only from its own generator.

Values enter the map in one of two ways:

- insert(value) allocates a key and stores the value in one step.
- reserve() allocates a key now; redeem(reservation, value) stores the value
  later. The Reservation is a plain value stamped with the identity of the
  map that issued it, and only that map will accept it back.

Each map instance is single-threaded. Only identity allocation at
construction is shared across threads (see _identity).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, ItemsView, Iterator, KeysView, TypeVar, ValuesView

from seqid import _identity
from seqid.errors import ForeignReservationError, IdentityExhaustedError, KeyCollisionError
from seqid.generator import U64, UniqueGenerator

K = TypeVar("K")
V = TypeVar("V")

logger = logging.getLogger("seqid.seqmap")

# CPython dicts start at 8 slots and keep two thirds of the table usable.
_MIN_DICT_SLOTS = 8


@dataclass(frozen=True, slots=True, init=False)
class Reservation(Generic[K]):
    """The right to store exactly one value under an already allocated key.

    Holds no reference to the issuing map, so it can be stored, passed to
    another thread, or outlive the map. Only SeqHashMap.reserve() creates
    one; calling Reservation(...) directly raises TypeError.
    """

    key: K
    origin: int

    def __init__(self, *args: object, **kwargs: object) -> None:
        raise TypeError("Reservations are issued by SeqHashMap.reserve()")

    @classmethod
    def _issue(cls, key: K, origin: int) -> Reservation[K]:
        reservation = object.__new__(cls)
        object.__setattr__(reservation, "key", key)
        object.__setattr__(reservation, "origin", origin)
        return reservation


class SeqHashMap(Generic[K, V]):
    """Dict keyed by IDs from a private UniqueGenerator, with reservations.

    Usage:
        a = SeqHashMap.new(U8)
        b = SeqHashMap.new(U8)

        a.insert("x")          # 0
        r = a.reserve()        # Reservation(key=1, origin=a.uid)
        b.redeem(r, "y")       # raises ForeignReservationError, r untouched
        a.redeem(r, "y")       # 1
        a.get(1)               # "y"
    """

    __slots__ = ("_uid", "_gen", "_map", "_exhaustion_logged")

    def __init__(self, generator: Callable[[], UniqueGenerator[K]] = U64) -> None:
        uid = _identity.allocate()
        if uid is None:
            raise IdentityExhaustedError("no SeqHashMap identities left in this process")
        self._uid: int = uid
        self._gen: UniqueGenerator[K] = generator()
        self._map: dict[K, V] = {}
        self._exhaustion_logged = False
        logger.debug("Created SeqHashMap %d with %r", uid, self._gen)

    @classmethod
    def new(cls, generator: Callable[[], UniqueGenerator[K]] = U64) -> SeqHashMap[K, V] | None:
        """Create a map, or return None if the identity space is exhausted."""
        try:
            return cls(generator)
        except IdentityExhaustedError:
            return None

    @property
    def uid(self) -> int:
        """This map's process-unique identity."""
        return self._uid

    # --- Allocation ---

    def _allocate(self) -> K | None:
        key = self._gen.next()
        if key is None and not self._exhaustion_logged:
            self._exhaustion_logged = True
            logger.info("SeqHashMap %d: key generator exhausted", self._uid)
        return key

    def _store(self, key: K, value: V) -> K:
        if key in self._map:
            logger.error("SeqHashMap %d: generator repeated key %r", self._uid, key)
            raise KeyCollisionError(key)
        self._map[key] = value
        return key

    def insert(self, value: V) -> K | None:
        """Store value under a fresh key and return the key.

        Returns None, storing nothing, if the generator is exhausted.
        Raises KeyCollisionError if the generator produced a repeated key.
        """
        key = self._allocate()
        if key is None:
            return None
        return self._store(key, value)

    def reserve(self) -> Reservation[K] | None:
        """Allocate a key without storing anything. None if exhausted.

        The key is consumed from the generator immediately, so it will never
        be handed out again, whether or not the reservation is redeemed.
        """
        key = self._allocate()
        if key is None:
            return None
        return Reservation._issue(key, self._uid)

    def redeem(self, reservation: Reservation[K], value: V) -> K:
        """Store value under a reserved key and return the key.

        Raises ForeignReservationError if the reservation came from another
        map; nothing is modified and the reservation is returned on the
        exception. Raises KeyCollisionError if the key is already present.
        """
        if reservation.origin != self._uid:
            logger.debug(
                "SeqHashMap %d: rejected reservation from map %d", self._uid, reservation.origin
            )
            raise ForeignReservationError(reservation, self._uid)
        return self._store(reservation.key, value)

    # --- Read operations ---

    def get(self, key: K, default: V | None = None) -> V | None:
        """Look up key. Does not check which map produced the key."""
        return self._map.get(key, default)

    def __getitem__(self, key: K) -> V:
        return self._map[key]

    def __contains__(self, key: object) -> bool:
        return key in self._map

    def __iter__(self) -> Iterator[K]:
        return iter(self._map)

    def __len__(self) -> int:
        return len(self._map)

    def items(self) -> ItemsView[K, V]:
        """(key, value) pairs in insertion order."""
        return self._map.items()

    def keys(self) -> KeysView[K]:
        return self._map.keys()

    def values(self) -> ValuesView[V]:
        return self._map.values()

    def capacity(self) -> int:
        """Lower bound on the entries the backing dict holds before growing.

        Dicts don't expose their table size. This is the usable part of the
        smallest power-of-two table (at least 8 slots) that fits len(self).
        CPython usually over-allocates, so the real figure is often larger.
        """
        slots = _MIN_DICT_SLOTS
        while (slots << 1) // 3 < len(self._map):
            slots <<= 1
        return (slots << 1) // 3

    def __repr__(self) -> str:
        return f"SeqHashMap(uid={self._uid}, {self._map!r})"
