import logging
import os
import sys

import hydra
import uvicorn
from omegaconf import DictConfig

# Add src to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from src.common.config.manager import ConfigManager
from src.common.logging import setup_logger
from src.prediction.application.builder import DelayRiskApplicationBuilder
from src.prediction.presentation.api import create_app

logger = setup_logger("src", logging.INFO)


@hydra.main(version_base=None, config_path="../conf", config_name="config")
def main(cfg: DictConfig):
    engine_cfg = ConfigManager.merge(cfg.prediction)
    logger.info("Configuration loaded.")

    builder = DelayRiskApplicationBuilder(engine_cfg)
    service = builder.build_scheduler().build_service()
    app = create_app(service, builder.scheduler)

    server_cfg = engine_cfg.server
    logger.info(f"Starting server at http://{server_cfg.host}:{server_cfg.port}")
    uvicorn.run(app, host=server_cfg.host, port=server_cfg.port)


if __name__ == "__main__":
    main()
