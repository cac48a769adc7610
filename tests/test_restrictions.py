from __future__ import annotations

import math

import pytest

from mdinteract.errors import ConfigError
from mdinteract.restrictions import PairRestriction, RestrictionInfo, RestrictionKind, active
from mdinteract.topology import CONNECT_12, CONNECT_13, CONNECT_14, CONNECT_FAR, Connectivity

ALL = (CONNECT_12, CONNECT_13, CONNECT_14, CONNECT_FAR)


def test_none_never_excludes():
    r = PairRestriction.none()
    for c in ALL:
        for same in (True, False):
            assert not r.is_excluded_pair(c, same)
            assert r.scale(c) == 1.0


def test_missing_restriction_is_active():
    assert active(None, CONNECT_12, True) == RestrictionInfo(active=True, scaling=1.0)


@pytest.mark.parametrize(
    "restriction, excluded",
    [
        (PairRestriction.exclude12(), CONNECT_12),
        (PairRestriction.exclude13(), CONNECT_13),
        (PairRestriction.exclude14(), CONNECT_14),
    ],
)
def test_exclude_n_excludes_only_its_class(restriction, excluded):
    for c in ALL:
        assert restriction.is_excluded_pair(c, True) == (c == excluded)


def test_exclusion_tests_bit_presence():
    ring = CONNECT_12 | CONNECT_14
    assert PairRestriction.exclude14().is_excluded_pair(ring, True)
    assert PairRestriction.exclude12().is_excluded_pair(ring, True)
    assert not PairRestriction.exclude13().is_excluded_pair(ring, True)


def test_intra_and_inter_molecular_ignore_connectivity():
    intra = PairRestriction.intra_molecular()
    inter = PairRestriction.inter_molecular()
    for c in ALL:
        assert not intra.is_excluded_pair(c, True)
        assert intra.is_excluded_pair(c, False)
        assert inter.is_excluded_pair(c, True)
        assert not inter.is_excluded_pair(c, False)


def test_scale14_scales_only_14_pairs():
    r = PairRestriction.scale14(0.5)
    assert r.scale(CONNECT_14) == 0.5
    assert r.scale(CONNECT_12 | CONNECT_14) == 0.5
    for c in (CONNECT_12, CONNECT_13, CONNECT_FAR):
        assert r.scale(c) == 1.0
        assert not r.is_excluded_pair(c, True)
    assert active(r, CONNECT_14, True) == RestrictionInfo(active=True, scaling=0.5)


def test_scale14_bounds_are_inclusive():
    assert PairRestriction.scale14(0.0).scaling == 0.0
    assert PairRestriction.scale14(1.0).scaling == 1.0


@pytest.mark.parametrize("bad", [-0.1, 1.5, math.nan, math.inf])
def test_scale14_out_of_range_is_rejected(bad):
    with pytest.raises(ConfigError, match="between 0 and 1"):
        PairRestriction.scale14(bad)


def test_scaling_on_other_kinds_is_rejected():
    with pytest.raises(ConfigError):
        PairRestriction(RestrictionKind.EXCLUDE_12, 0.5)
    with pytest.raises(ConfigError):
        PairRestriction(RestrictionKind.SCALE_14, True)


def test_kind_accepts_string_value():
    assert PairRestriction("exclude13") == PairRestriction.exclude13()
    with pytest.raises(ValueError):
        PairRestriction("exclude15")


def test_information_combines_both():
    info = PairRestriction.exclude12().information(Connectivity.CONNECT_12, True)
    assert info == RestrictionInfo(active=False, scaling=1.0)
