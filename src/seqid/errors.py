"""Exceptions raised by seqid.

Running out of IDs is not an error: generators and SeqHashMap.new() signal it
by returning None. The exceptions below cover misuse and broken invariants.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from seqid.seqmap import Reservation


class SeqIdError(Exception):
    """Base class for all seqid errors."""


class ForeignReservationError(SeqIdError):
    """A reservation was redeemed against a map that did not issue it.

    Recoverable. The untouched reservation is available as `.reservation`
    and can still be redeemed against the map that issued it.
    """

    def __init__(self, reservation: Reservation, expected: int) -> None:
        super().__init__(
            f"reservation for key {reservation.key!r} was issued by map {reservation.origin}, "
            f"not map {expected}"
        )
        self.reservation = reservation
        self.expected = expected


class KeyCollisionError(RuntimeError):
    """A freshly allocated key was already present in the map.

    This means the generator repeated a value. The map refuses to overwrite
    the existing entry. Not a SeqIdError: handlers for recoverable errors
    must not catch it.
    """

    def __init__(self, key: object) -> None:
        super().__init__(f"unique ID {key!r} must not overwrite a previous element")
        self.key = key


class IdentityExhaustedError(SeqIdError):
    """No map identities are left in this process."""
