"""Tests for the module-level functions on the shared default store.

``genv.initialize`` / ``genv.load`` take the directory as an optional
trailing positional argument, so a single call shape covers "use my
home directory" and "use this directory".  More than one directory is
an ArgumentError.
"""

from pathlib import Path

import pytest

import genv
from genv.errors import ArgumentError, InvalidDirectoryError, NotInitializedError


def _fresh_default(monkeypatch: pytest.MonkeyPatch, home: Path) -> genv.VariableStore:
    """Reset the default store and point the home directory at *home*."""
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    return genv.reset()


class TestDefaultStore:
    """Verify the shared store and its reset."""

    def test_get_store_returns_same_instance(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """get_store() should return the store the functions act on."""
        store = _fresh_default(monkeypatch, tmp_path)
        genv.set_string("a", "1")
        assert genv.get_store() is store
        assert store.get_value("a") == "1"

    def test_reset_discards_variables(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A reset should start from an empty store."""
        _fresh_default(monkeypatch, tmp_path)
        genv.set_string("a", "1")
        genv.reset()
        assert genv.get_value("a") == ""

    def test_typed_setters(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """The module-level setters should store canonical strings."""
        _fresh_default(monkeypatch, tmp_path)
        genv.set_string("name", "demo")
        genv.set_int("port", 8080)
        genv.set_float("ratio", 0.1)
        assert genv.get_value("name") == "demo"
        assert genv.get_value("port") == "8080"
        assert genv.get_value("ratio") == "0.1"


class TestDirectoryArguments:
    """Verify the optional directory argument."""

    def test_initialize_too_many_directories(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Two directories should raise ArgumentError and create nothing."""
        _fresh_default(monkeypatch, tmp_path)
        first = tmp_path / "a"
        second = tmp_path / "b"
        first.mkdir()
        second.mkdir()
        with pytest.raises(ArgumentError, match="at most one directory"):
            genv.initialize("demo", first, second)
        assert list(first.iterdir()) == []
        assert list(second.iterdir()) == []

    def test_load_too_many_directories(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Two directories on load should raise ArgumentError."""
        _fresh_default(monkeypatch, tmp_path)
        with pytest.raises(ArgumentError):
            genv.load("demo", "/tmp/a", "/tmp/b")

    def test_initialize_with_directory(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A single directory should be used as the base."""
        _fresh_default(monkeypatch, tmp_path / "unused")
        location = genv.initialize("demo", tmp_path)
        assert location.path == tmp_path / ".DEMO" / ".DEMO.env"

    def test_load_missing_directory(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """A missing directory should raise and keep existing variables."""
        _fresh_default(monkeypatch, tmp_path)
        genv.set_string("keep", "me")
        with pytest.raises(InvalidDirectoryError):
            genv.load("demo", tmp_path / "nope")
        assert genv.get_value("keep") == "me"


class TestRoundTrip:
    """Verify the full initialize, save, load cycle through the functions."""

    def test_save_before_initialize(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Saving a fresh default store should raise NotInitializedError."""
        _fresh_default(monkeypatch, tmp_path)
        with pytest.raises(NotInitializedError):
            genv.save()

    def test_round_trip_through_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Values saved in one run should load in the next."""
        _fresh_default(monkeypatch, tmp_path)
        genv.initialize("demo")
        genv.set_string("a", "1")
        genv.set_string("b", "2")
        genv.set_string("c", "")
        genv.save()

        genv.reset()
        genv.load("demo")
        assert genv.get_value("a") == "1"
        assert genv.get_value("b") == "2"
        content = (tmp_path / ".DEMO" / ".DEMO.env").read_text(encoding="utf-8")
        assert "c=" not in content

    def test_load_strict(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """The strict flag should reach the store."""
        _fresh_default(monkeypatch, tmp_path)
        (tmp_path / ".DEMO.env").write_text("broken\n", encoding="utf-8")
        with pytest.raises(genv.MalformedLineError):
            genv.load("demo", tmp_path, strict=True)
