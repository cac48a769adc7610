from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional

from .errors import ConfigError
from .topology import Connectivity


class RestrictionKind(Enum):
    NONE = "none"
    INTRA_MOLECULAR = "intramolecular"
    INTER_MOLECULAR = "intermolecular"
    EXCLUDE_12 = "exclude12"
    EXCLUDE_13 = "exclude13"
    EXCLUDE_14 = "exclude14"
    SCALE_14 = "scale14"


_EXCLUDED_CLASS = {
    RestrictionKind.EXCLUDE_12: Connectivity.CONNECT_12,
    RestrictionKind.EXCLUDE_13: Connectivity.CONNECT_13,
    RestrictionKind.EXCLUDE_14: Connectivity.CONNECT_14,
}


class RestrictionInfo(NamedTuple):
    active: bool
    scaling: float


@dataclass(frozen=True)
class PairRestriction:
    """Gate a non-bonded pair interaction on topology.

    ``scaling`` only applies to ``SCALE_14`` and must lie in ``[0, 1]``.
    """

    kind: RestrictionKind = RestrictionKind.NONE
    scaling: float = 1.0

    def __post_init__(self) -> None:
        kind = RestrictionKind(self.kind)
        object.__setattr__(self, "kind", kind)
        if isinstance(self.scaling, bool) or not isinstance(self.scaling, (int, float)):
            raise ConfigError(f"restriction scaling must be a number, got {self.scaling!r}")
        scaling = float(self.scaling)
        if kind is RestrictionKind.SCALE_14:
            if not (math.isfinite(scaling) and 0.0 <= scaling <= 1.0):
                raise ConfigError(
                    "Scaling parameter for Scale14 restriction must be between 0 and 1, "
                    f"got {scaling}"
                )
        elif scaling != 1.0:
            raise ConfigError(f"scaling is only meaningful for Scale14 restriction, not {kind.value}")
        object.__setattr__(self, "scaling", scaling)

    @classmethod
    def none(cls) -> "PairRestriction":
        return cls(RestrictionKind.NONE)

    @classmethod
    def intra_molecular(cls) -> "PairRestriction":
        return cls(RestrictionKind.INTRA_MOLECULAR)

    @classmethod
    def inter_molecular(cls) -> "PairRestriction":
        return cls(RestrictionKind.INTER_MOLECULAR)

    @classmethod
    def exclude12(cls) -> "PairRestriction":
        return cls(RestrictionKind.EXCLUDE_12)

    @classmethod
    def exclude13(cls) -> "PairRestriction":
        return cls(RestrictionKind.EXCLUDE_13)

    @classmethod
    def exclude14(cls) -> "PairRestriction":
        return cls(RestrictionKind.EXCLUDE_14)

    @classmethod
    def scale14(cls, scaling: float) -> "PairRestriction":
        return cls(RestrictionKind.SCALE_14, scaling)

    def is_excluded_pair(self, connectivity: Connectivity, same_molecule: bool) -> bool:
        kind = self.kind
        if kind is RestrictionKind.INTRA_MOLECULAR:
            return not same_molecule
        if kind is RestrictionKind.INTER_MOLECULAR:
            return bool(same_molecule)
        excluded = _EXCLUDED_CLASS.get(kind)
        if excluded is not None:
            return bool(Connectivity(connectivity) & excluded)
        return False

    def scale(self, connectivity: Connectivity) -> float:
        if self.kind is RestrictionKind.SCALE_14 and Connectivity(connectivity) & Connectivity.CONNECT_14:
            return self.scaling
        return 1.0

    def information(self, connectivity: Connectivity, same_molecule: bool) -> RestrictionInfo:
        return RestrictionInfo(
            active=not self.is_excluded_pair(connectivity, same_molecule),
            scaling=self.scale(connectivity),
        )


def active(
    restriction: Optional[PairRestriction],
    connectivity: Connectivity,
    same_molecule: bool,
) -> RestrictionInfo:
    """Whether a pair interacts under ``restriction``, and with which scaling."""
    if restriction is None:
        return RestrictionInfo(active=True, scaling=1.0)
    return restriction.information(connectivity, same_molecule)
