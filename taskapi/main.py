import asyncio
import logging

import uvicorn
from dotenv import load_dotenv

from taskapi.api.main import create_app
from taskapi.api.settings import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


async def main():
    # Values from .env do not override the real environment
    load_dotenv()
    settings = get_settings()

    logging.basicConfig(level=settings.LOG_LEVEL, format=LOG_FORMAT)

    config = uvicorn.Config(
        app=create_app(settings),
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.LOG_LEVEL.lower(),
    )
    server = uvicorn.Server(config)
    logging.info(f"Starting {settings.PROJECT_NAME} on {settings.SERVER_ADDRESS}")
    await server.serve()

    # uvicorn reports a failed lifespan startup or bind by returning early
    if not server.started:
        raise SystemExit(1)


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
