from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from amdstats.config import Settings
from amdstats.errors import ConfigurationError
from amdstats.summary.categories import Category, CategorySet


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("AMDSTATS_DATA_DIR", "/srv/lists")
    monkeypatch.setenv("AMDSTATS_MAX_SAMPLE_AGE", "10000")
    monkeypatch.setenv("AMDSTATS_INCLUDE_ANTHROPOGENIC", "true")

    settings = Settings()

    assert settings.data_dir == Path("/srv/lists")
    assert settings.max_sample_age == 10000
    assert settings.include_anthropogenic is True


def test_settings_reject_non_positive_age():
    with pytest.raises(ValidationError):
        Settings(max_sample_age=0)


def test_category_set_rejects_duplicates():
    with pytest.raises(ConfigurationError, match="A"):
        CategorySet((Category("A", "#000"), Category("A", "#111")))


def test_category_set_extend_keeps_order():
    base = CategorySet.from_mapping({"A": "#000", "B": "#111"})
    extended = base.extend([Category("C")])

    assert extended.labels == ("A", "B", "C")
    assert base.labels == ("A", "B")
    assert extended.palette() == {"A": "#000", "B": "#111"}
    assert "C" in extended
    assert extended.get("C").color is None
