from dataclasses import replace
from pathlib import Path

import pytest

from attractor.settings import (
    default_settings, dict_to_settings, load_settings, save_settings, settings_to_dict, validate_settings
)

SAVES_DIR = Path(__file__).parent.parent / "saves"


def test_saved_settings_load_back(tmp_path):
    settings = replace(default_settings, iterations=1234, colormap="inferno", fit="analytic")
    path = tmp_path / "settings.yaml"
    save_settings(settings, path)
    assert load_settings(path) == settings


def test_missing_sections_use_defaults():
    settings = dict_to_settings({"computation": {"iterations": 10}})
    assert settings.iterations == 10
    assert settings.coefficients == default_settings.coefficients
    assert settings.gradient == default_settings.gradient


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_settings(path) == default_settings


def test_bundled_save_file_matches_defaults():
    assert load_settings(SAVES_DIR / "clifford.yaml") == default_settings


@pytest.mark.parametrize("overrides", [
    {"iterations": 0},
    {"resolution": (0, 10)},
    {"fit": "sideways"},
    {"out_of_bounds": "wrap"},
    {"batch_size": -1},
    {"coefficients": (1.0, 2.0)},
])
def test_rejects_invalid_settings(overrides):
    with pytest.raises(ValueError):
        validate_settings(replace(default_settings, **overrides))


def test_rejects_invalid_settings_on_load():
    settings_dict = settings_to_dict(default_settings)
    settings_dict["computation"]["fit"] = "sideways"
    with pytest.raises(ValueError):
        dict_to_settings(settings_dict)


def test_partial_nested_section_keeps_the_other_defaults():
    settings = dict_to_settings({
        "attractor": {"coefficients": {"a": 1.0}},
        "camera": {"resolution": {"width": 64}, "center": None},
    })
    assert settings.coefficients == (1.0,) + default_settings.coefficients[1:]
    assert settings.seed == default_settings.seed
    assert settings.resolution == (64, default_settings.resolution[1])
    assert settings.center == default_settings.center
