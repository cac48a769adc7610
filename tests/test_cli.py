from __future__ import annotations

from pathlib import Path

import pytest

from mdinteract.cli import main

DATA = Path(__file__).parent / "data"


def test_check_ok(capsys):
    rc = main(["check", str(DATA / "wolf.yml"), "--particle", "Na:2", "--particle", "Cl"])
    out = capsys.readouterr().out
    assert rc == 0
    assert "ok" in out
    assert "coulomb: wolf" in out
    assert "charge Na: 2 particles" in out


def test_check_reports_error_kind(capsys):
    rc = main(["check", str(DATA / "wolf.yml")])
    err = capsys.readouterr().err
    assert rc == 1
    assert err.startswith("error (config): No particle with the name")


def test_check_units_error(capsys):
    rc = main(["check", str(DATA / "bad" / "pairs-bad-unit.yml")])
    assert rc == 1
    assert "error (units)" in capsys.readouterr().err


def test_check_missing_file(tmp_path, capsys):
    rc = main(["check", str(tmp_path / "nope.yml")])
    assert rc == 1
    assert "error (file)" in capsys.readouterr().err


def test_bad_particle_spec():
    with pytest.raises(SystemExit):
        main(["check", str(DATA / "pairs.yml"), "--particle", "Na:zero"])


def test_check_unit_syntax_error(capsys):
    rc = main(["check", str(DATA / "bad" / "pairs-bad-unit-syntax.yml")])
    assert rc == 1
    assert "error (units)" in capsys.readouterr().err
