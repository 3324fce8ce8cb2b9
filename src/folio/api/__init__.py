"""REST API for the portfolio site and its admin."""

from folio.api.app import create_api_app

__all__ = ["create_api_app"]
