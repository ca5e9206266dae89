from __future__ import annotations

from pathlib import Path

import pytest

import preferences.preferences as pref


@pytest.fixture(autouse=True)
def isolated_preferences(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Reset the preference globals and point persistence at a temporary file."""

    prefs_file = tmp_path / "prefs.json"
    monkeypatch.setattr(pref, "prefsFile", str(prefs_file))
    monkeypatch.setattr(pref, "computation", "python")
    monkeypatch.setattr(pref, "verbose", False)
    monkeypatch.setattr(pref, "transferFunction", "hdr")
    monkeypatch.setattr(pref, "exposure", 1.0)
    monkeypatch.setattr(pref, "srgb", False)
    return prefs_file


@pytest.fixture(params=["python", "numba"])
def computation(request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch) -> str:
    """Run a test once per computation backend."""

    monkeypatch.setattr(pref, "computation", request.param)
    return request.param
