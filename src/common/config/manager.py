from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException
from pathlib import Path
from typing import List, Optional

from .models import EngineConfig
from ..exceptions import ConfigurationError

class ConfigManager:
    """Centralizes loading and validation of engine configuration"""

    REQUIRED_KEYS = ['persistence', 'lookups', 'learning']

    def __init__(self, config_dir: Path = Path("conf")):
        self.config_dir = Path(config_dir)

    def load_prediction_config(self, profile: str = "default", overrides: Optional[List[str]] = None) -> DictConfig:
        """Loads conf/prediction/<profile>.yaml on top of the structured defaults"""
        config_path = self.config_dir / "prediction" / f"{profile}.yaml"

        if not config_path.exists():
            raise FileNotFoundError(f"Config not found: {config_path}")

        raw = OmegaConf.load(config_path)
        for key in self.REQUIRED_KEYS:
            if key not in raw:
                raise ConfigurationError(f"Missing required config key: {key}")

        return self.merge(raw, overrides)

    @staticmethod
    def merge(raw: Optional[DictConfig] = None, overrides: Optional[List[str]] = None) -> DictConfig:
        """Validates raw values against EngineConfig and applies dotlist overrides"""
        schema = OmegaConf.structured(EngineConfig)
        try:
            cfg = OmegaConf.merge(schema, raw or {})
            if overrides:
                cfg = OmegaConf.merge(cfg, OmegaConf.from_dotlist(overrides))
        except OmegaConfBaseException as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

        lookups = cfg.lookups
        if lookups.timeout_seconds <= 0:
            raise ConfigurationError("lookups.timeout_seconds must be positive")
        if not 0.0 <= cfg.learning.materialize_probability <= 1.0:
            raise ConfigurationError("learning.materialize_probability must be within [0, 1]")
        return cfg
