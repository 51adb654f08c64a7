import logging

import uvicorn
from shelf.api.api_run import app
from shelf.utilities.config import APP_HOST, APP_PORT, DEBUG
from shelf.utilities.network import service_urls

logger = logging.getLogger("shelf_app")


def run(host: str = APP_HOST, port: int = APP_PORT):
    """Start the ShelfSmart API with uvicorn."""
    logging.basicConfig(
        level=logging.DEBUG if DEBUG else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    urls = service_urls(port)
    logger.info("ShelfSmart API listening on %s", urls["local"])
    if urls["lan"]:
        logger.info("Reachable from the local network at %s", urls["lan"])
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run()
