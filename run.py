"""Entry point for the Parking Control API.

Launches the FastAPI application with Uvicorn.  Host, port and the
rest of the configuration are read from environment variables (see
``parking_control_api.app.core.config``).

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from parking_control_api.app.core.config import settings
from parking_control_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logging.getLogger("parking_control_api").info(
        "Starting %s on %s:%s",
        settings.project_name,
        settings.host,
        settings.port,
    )
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
