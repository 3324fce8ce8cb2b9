"""Structured logging for Folio.

Usage:
    from folio.logging import configure_logging

    configure_logging(service_name="api")
    log = structlog.get_logger()
    log.info("server_starting", port=3340)
"""

from folio.logging.config import build_processors, configure_logging

__all__ = ["build_processors", "configure_logging"]
