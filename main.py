import logging

import uvicorn

from product_api.config import get_config, get_environment

if __name__ == "__main__":
    config = get_config()

    logging.basicConfig(
        level=config.logging.level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger = logging.getLogger(__name__)

    logger.info(
        f"Starting Product API ({get_environment()} environment, "
        f"{config.store.backend} store) on {config.server.host}:{config.server.port}"
    )
    uvicorn.run(
        "product_api.api:app",
        host=config.server.host,
        port=config.server.port,
        log_level=config.logging.level.lower(),
    )
