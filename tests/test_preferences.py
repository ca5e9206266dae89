from __future__ import annotations

import json
from pathlib import Path

import pytest

import preferences.preferences as pref


def test_defaults() -> None:
    assert pref.getComputationMode() == "python"
    assert pref.getTransferFunction() == "hdr"
    assert pref.getExposure() == 1.0
    assert pref.isSRGB() is False


def test_load_missing_file_returns_none(isolated_preferences: Path) -> None:
    assert not isolated_preferences.exists()
    assert pref.loadPref() is None


def test_save_then_load(isolated_preferences: Path) -> None:
    pref.setTransferFunction("SRGB")
    pref.setExposure(4)
    pref.setSRGB(True)
    pref.savePref()

    stored = json.loads(isolated_preferences.read_text())
    assert stored == {
        "computation": "python",
        "transferFunction": "srgb",
        "exposure": 4.0,
        "srgb": True,
    }
    assert pref.loadPref() == stored


def test_apply_pref_keeps_missing_keys() -> None:
    pref.applyPref({"exposure": 2, "computation": "numba"})
    assert pref.getExposure() == 2.0
    assert pref.getComputationMode() == "numba"
    assert pref.getTransferFunction() == "hdr"
    assert pref.isSRGB() is False


def test_unknown_computation_mode_is_ignored(capsys: pytest.CaptureFixture[str]) -> None:
    pref.setComputationMode("cuda")
    assert pref.getComputationMode() == "python"
    assert "WARNING[preferences.setComputationMode(" in capsys.readouterr().out

    pref.setComputationMode("numba")
    assert pref.getComputationMode() == "numba"


def test_unknown_transfer_function_is_ignored(capsys: pytest.CaptureFixture[str]) -> None:
    pref.setTransferFunction("pq")
    assert pref.getTransferFunction() == "hdr"
    assert "WARNING[preferences.setTransferFunction(" in capsys.readouterr().out


def test_exposure_is_not_validated() -> None:
    pref.setExposure(0)
    assert pref.getExposure() == 0.0


def test_verbose_traces_setters(capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(pref, "verbose", True)
    pref.setExposure(3.0)
    pref.savePref()
    out = capsys.readouterr().out
    assert " [PREF] >> setExposure(" in out
    assert " [PREF] >> savePref(" in out


def test_save_writes_to_redirected_file(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    target = tmp_path / "config" / "uTF.json"
    target.parent.mkdir()
    monkeypatch.setattr(pref, "prefsFile", str(target))
    pref.setExposure(2.5)
    pref.savePref()
    assert json.loads(target.read_text())["exposure"] == 2.5
    assert pref.loadPref()["exposure"] == 2.5
