"""Entry point for the Folio API server."""

from typing import TYPE_CHECKING

import structlog

from folio import __version__
from folio.config import settings
from folio.logging import configure_logging

if TYPE_CHECKING:
    from fastapi import FastAPI


def run_server(host: str | None = None, port: int | None = None, *, reload: bool = False) -> None:
    """Run the API server.

    Args:
        host: Host to bind to (defaults to settings.server_host)
        port: Port to listen on (defaults to settings.server_port)
        reload: Restart on source changes (development only)
    """
    import uvicorn

    _configure_logging()
    log = structlog.get_logger()

    # Use settings defaults if not specified
    host = host or settings.server_host
    port = port or settings.server_port

    log.info(
        "server_starting",
        version=__version__,
        name=settings.server_name,
        environment=settings.environment,
        host=host,
        port=port,
    )
    log.info(
        "server_endpoints",
        api=f"http://{host}:{port}",
        docs=f"http://{host}:{port}/docs",
    )

    uvicorn.run(
        "folio.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level="warning",  # Suppress verbose uvicorn logs
        access_log=False,
    )


def create_app() -> "FastAPI":
    """App factory for uvicorn. Runs in the server process, so it sets up logging too."""
    from folio.api.app import create_api_app

    _configure_logging()
    return create_api_app()


def _configure_logging() -> None:
    configure_logging(
        service_name="api",
        level=settings.log_level,
        json_output=settings.log_json,
    )


def main() -> None:
    """Main entry point."""
    run_server()


if __name__ == "__main__":
    main()
