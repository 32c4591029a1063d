from pathlib import Path

import pytest
from omegaconf import OmegaConf

from src.common.config.manager import ConfigManager
from src.common.exceptions import ConfigurationError


@pytest.fixture
def config_dir(tmp_path):
    (tmp_path / "prediction").mkdir()
    (tmp_path / "prediction" / "default.yaml").write_text(
        "persistence:\n"
        "  type: memory\n"
        "lookups:\n"
        "  timeout_seconds: 1.5\n"
        "learning:\n"
        "  interval_seconds: 60\n"
    )
    return tmp_path


def test_load_merges_with_defaults(config_dir):
    cfg = ConfigManager(config_dir).load_prediction_config()

    assert cfg.persistence.type == "memory"
    assert cfg.persistence.key == "historicalIncidents"
    assert cfg.lookups.timeout_seconds == 1.5
    assert cfg.learning.materialize_probability == 0.3
    assert cfg.calendar.timezone == "Europe/Amsterdam"
    assert cfg.route_separator == " - "


def test_overrides_win(config_dir):
    cfg = ConfigManager(config_dir).load_prediction_config(
        overrides=["learning.interval_seconds=5", "seeding.seed=3"]
    )
    assert cfg.learning.interval_seconds == 5.0
    assert cfg.seeding.seed == 3


def test_missing_profile(config_dir):
    with pytest.raises(FileNotFoundError):
        ConfigManager(config_dir).load_prediction_config("staging")


def test_missing_required_key(tmp_path):
    (tmp_path / "prediction").mkdir()
    (tmp_path / "prediction" / "default.yaml").write_text("persistence:\n  type: memory\n")
    with pytest.raises(ConfigurationError):
        ConfigManager(tmp_path).load_prediction_config()


@pytest.mark.parametrize("overrides", [
    ["lookups.timeout_seconds=0"],
    ["learning.materialize_probability=1.5"],
    ["seeding.days=ninety"],
    ["unknown_section.value=1"],
])
def test_invalid_values(overrides):
    with pytest.raises(ConfigurationError):
        ConfigManager.merge(OmegaConf.create({}), overrides)


def test_shipped_default_profile_loads():
    cfg = ConfigManager(Path(__file__).parents[2] / "conf").load_prediction_config()
    assert cfg.persistence.type == "file"
    assert cfg.learning.enabled is True
