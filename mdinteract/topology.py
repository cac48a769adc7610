"""Canonical bonded terms over particle indices.

``Bond``, ``Angle`` and ``Dihedral`` canonicalize their indices at
construction so that two constructions of the same physical term compare
equal and hash identically whatever the input order:

- Bond: ``i < j``.
- Angle: end points sorted (``i < k``), vertex ``j`` kept in place.
- Dihedral: kept in input order when ``max(i, j) < max(k, m)``, reversed
  when it is greater; equal maxima (degenerate chains only) keep the
  lexicographically smaller of the two orientations.

Repeated indices are programming errors and raise ``ValueError``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag


def _distinct(*pairs: tuple[int, int], what: str) -> None:
    for a, b in pairs:
        if a == b:
            raise ValueError(f"{what}: particle index {a} is repeated")


@dataclass(frozen=True, order=True)
class Bond:
    i: int
    j: int

    def __post_init__(self) -> None:
        i, j = int(self.i), int(self.j)
        _distinct((i, j), what="Bond")
        object.__setattr__(self, "i", min(i, j))
        object.__setattr__(self, "j", max(i, j))


@dataclass(frozen=True, order=True)
class Angle:
    i: int
    j: int
    k: int

    def __post_init__(self) -> None:
        i, j, k = int(self.i), int(self.j), int(self.k)
        _distinct((i, j), (i, k), (j, k), what="Angle")
        object.__setattr__(self, "i", min(i, k))
        object.__setattr__(self, "j", j)
        object.__setattr__(self, "k", max(i, k))


@dataclass(frozen=True, order=True)
class Dihedral:
    i: int
    j: int
    k: int
    m: int

    def __post_init__(self) -> None:
        fwd = (int(self.i), int(self.j), int(self.k), int(self.m))
        _distinct((fwd[0], fwd[1]), (fwd[1], fwd[2]), (fwd[2], fwd[3]), what="Dihedral")
        rev = fwd[::-1]
        head, tail = max(fwd[0], fwd[1]), max(fwd[2], fwd[3])
        if head < tail:
            out = fwd
        elif head > tail:
            out = rev
        else:
            out = min(fwd, rev)
        for name, value in zip(("i", "j", "k", "m"), out):
            object.__setattr__(self, name, value)


class Connectivity(IntFlag):
    """Topological distance classes between two particles.

    A pair can carry several bits at once when it is linked by more than
    one bond path (rings).
    """

    CONNECT_12 = 0b0001
    CONNECT_13 = 0b0010
    CONNECT_14 = 0b0100
    CONNECT_FAR = 0b1000

    @classmethod
    def default(cls) -> "Connectivity":
        return cls.CONNECT_FAR


CONNECT_12 = Connectivity.CONNECT_12
CONNECT_13 = Connectivity.CONNECT_13
CONNECT_14 = Connectivity.CONNECT_14
CONNECT_FAR = Connectivity.CONNECT_FAR
