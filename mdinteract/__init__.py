"""Molecular topology and interaction configuration.

Version is single-sourced from the repository root VERSION file.
"""

from __future__ import annotations
from pathlib import Path

def _read_version() -> str:
    repo_root = Path(__file__).resolve().parents[1]
    try:
        return (repo_root / "VERSION").read_text(encoding="utf-8").strip()
    except OSError:
        return "0.3.0"

__version__ = _read_version()

from .errors import ConfigError, FileError, InteractionsError, UnitParsingError, YamlError
from .io import InteractionsInput, InteractionsSummary, read_interactions, read_interactions_string
from .restrictions import PairRestriction, RestrictionKind
from .system import Particle, System
from .topology import Angle, Bond, Connectivity, Dihedral
