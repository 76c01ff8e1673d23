"""
Tests for the YAML variant presets and the JSON settings file.
"""
import json
import sys
from pathlib import Path

import pytest
import yaml

# Add parent directory to path
parent_dir = Path(__file__).parent.parent
sys.path.insert(0, str(parent_dir))

from dataio.variant_config import (
    VariantConfig,
    VariantConfigError,
    list_available_variants,
    load_variant,
    load_variant_config,
)
from dataio.configuration import Config

VARIANTS_DIR = parent_dir / "config" / "variants"


def _write_yaml(path: Path, data) -> Path:
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f)
    return path


def test_shipped_variants_are_listed():
    names = {v["name"] for v in list_available_variants(VARIANTS_DIR)}
    assert {"classic", "zero_baseline"} <= names


def test_classic_variant():
    cfg = load_variant("classic", VARIANTS_DIR)
    assert cfg.initial_sample_size == 200
    assert cfg.baseline_line_mode == "mean_y"
    assert (cfg.sample_size_min, cfg.sample_size_max) == (10, 200)
    assert (cfg.range_min, cfg.range_max) == (0.0, 10.0)
    assert cfg.correlation_step == pytest.approx(0.01)


def test_zero_baseline_variant():
    cfg = load_variant_config(VARIANTS_DIR / "zero_baseline.yaml")
    assert cfg.initial_sample_size == 30
    assert cfg.baseline_line_mode == "zero"


def test_defaults_match_documented_bounds():
    cfg = VariantConfig().validate()
    assert (cfg.correlation_min, cfg.correlation_max) == (-1.0, 1.0)
    assert (cfg.sample_size_min, cfg.sample_size_max) == (10, 200)
    assert (cfg.range_min, cfg.range_max) == (0.0, 10.0)


def test_flat_keys_are_accepted(tmp_path):
    path = _write_yaml(tmp_path / "flat.yaml", {
        "initial_sample_size": 50,
        "sample_size_max": 100,
        "baseline_line_mode": "ZERO",
    })
    cfg = load_variant_config(path)
    assert cfg.name == "flat"
    assert cfg.initial_sample_size == 50
    assert cfg.sample_size_max == 100
    assert cfg.baseline_line_mode == "zero"


@pytest.mark.parametrize("data, key", [
    ({"baseline_line_mode": "median"}, "baseline_line_mode"),
    ({"sample_size": {"initial": 5}}, "initial_sample_size"),
    ({"sample_size": {"initial": 12.5}}, "initial_sample_size"),
    ({"correlation": {"max": 1.5}}, "correlation bounds"),
    ({"display_range": {"min": 10, "max": 0}}, "range_min"),
    ({"correlation": {"initial": "high"}}, "initial_correlation"),
])
def test_invalid_variants_are_rejected(tmp_path, data, key):
    path = _write_yaml(tmp_path / "bad.yaml", data)
    with pytest.raises(VariantConfigError, match=key):
        load_variant_config(path)


def test_missing_file_is_reported(tmp_path):
    with pytest.raises(VariantConfigError):
        load_variant_config(tmp_path / "nope.yaml")


def test_unknown_variant_name(tmp_path):
    with pytest.raises(VariantConfigError):
        load_variant("nope", tmp_path)


def test_broken_files_are_skipped_when_listing(tmp_path):
    _write_yaml(tmp_path / "good.yaml", {"name": "good"})
    (tmp_path / "broken.yaml").write_text("name: [unclosed", encoding="utf-8")
    names = [v["name"] for v in list_available_variants(tmp_path)]
    assert names == ["good"]


def test_settings_round_trip(tmp_path):
    cfg = Config(last_variant="zero_baseline", log_level="debug", config_folder=str(tmp_path))
    cfg.save()
    with open(tmp_path / "settings.json", encoding="utf-8") as f:
        assert json.load(f) == {"last_variant": "zero_baseline", "log_level": "DEBUG"}
    loaded = Config.load(tmp_path / "settings.json")
    assert loaded.last_variant == "zero_baseline"
    assert loaded.log_level == "DEBUG"


def test_corrupt_settings_fall_back_to_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    cfg = Config.load(path)
    assert cfg.last_variant == "classic"
    assert cfg.config_folder == str(tmp_path)
