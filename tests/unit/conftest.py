"""Shared pytest fixtures for enumbind tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from enumbind import Enumeration, Translator, set_translator
from enumbind.registry import registry


@pytest.fixture(autouse=True)
def fresh_translator():
    """Give every test an empty English translator."""
    translator = Translator(locale="en", default_locale="en")
    previous = set_translator(translator)
    yield translator
    set_translator(previous)


@pytest.fixture(autouse=True)
def isolated_registry(monkeypatch: pytest.MonkeyPatch):
    """Keep enumeration classes defined in one test out of the others."""
    monkeypatch.setattr(registry, "_enumerations", dict(registry._enumerations))
    yield registry


@pytest.fixture
def civil_status() -> type[Enumeration]:
    """Integer enumeration with one explicit label."""

    class CivilStatus(Enumeration):
        pass

    return CivilStatus.associate_values(married=(1, "Married"), single=2, divorced=(3, "divorced"))


@pytest.fixture
def locales_dir(tmp_path: Path) -> Path:
    """Directory with English and Portuguese locale files."""
    path = tmp_path / "locales"
    path.mkdir()
    (path / "en.yml").write_text(
        "en:\n"
        "  enumerations:\n"
        "    civil_status:\n"
        "      single: Unmarried\n"
    )
    (path / "pt.yml").write_text(
        "pt:\n"
        "  enumerations:\n"
        "    civil_status:\n"
        "      married: Casado\n"
        "      single: Solteiro\n"
    )
    return path
