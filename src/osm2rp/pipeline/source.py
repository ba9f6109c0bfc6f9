"""
BoundarySource - osm-boundaries.com download client

Requests one admin level at a time for a country relation and decodes the
gzip compressed GeoJSON response into a SourceDocument.
"""

import gzip
import json
import logging
import zlib
from typing import Optional

import requests
from pydantic import ValidationError

from ..config.settings import EndpointConfig
from ..domain.models import ExtractOptions, SourceDocument
from ..types import FetchError

logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"


class BoundarySource:
    """
    osm-boundaries.com download client.

    One GET per admin level, no retries. Any failure (network, HTTP status,
    decompression, JSON or schema) surfaces as FetchError.
    """

    def __init__(
        self,
        options: ExtractOptions,
        endpoint: Optional[EndpointConfig] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the client.

        Args:
            options: Validated run options (API key, database, region, srid, simplify)
            endpoint: Endpoint URL and timeout (defaults to osm-boundaries.com)
            session: Optional requests session, injected by tests
        """
        self.options = options
        self.endpoint = endpoint or EndpointConfig()
        self.session = session or requests.Session()

    def build_params(self, admin_level: int) -> dict[str, str]:
        """Query parameters selecting a single admin level below the country."""
        return {
            'apiKey': self.options.api_key,
            'db': self.options.database,
            'osmIds': self.options.boundary_id,
            'minAdminLevel': str(admin_level),
            'maxAdminLevel': str(admin_level),
            'format': 'GeoJSON',
            'srid': self.options.srid,
            'simplify': self.options.simplify,
            'recursive': '',
        }

    def fetch(self, admin_level: int) -> SourceDocument:
        """
        Download and decode all boundaries at one admin level.

        Args:
            admin_level: OSM admin level to request

        Returns:
            Decoded SourceDocument

        Raises:
            FetchError: On any transport or decoding failure
        """
        params = self.build_params(admin_level)
        redacted = {**params, 'apiKey': '***'}
        logger.debug(f"GET {self.endpoint.url} {redacted}")

        try:
            response = self.session.get(self.endpoint.url, params=params, timeout=self.endpoint.timeout_s)
            response.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(admin_level, f"request failed: {e}") from e

        document = self.decode(response.content, admin_level)
        logger.info(f"Fetched admin level {admin_level}: {len(document.features)} features")
        return document

    @staticmethod
    def decode(body: bytes, admin_level: Optional[int] = None) -> SourceDocument:
        """
        Decode a response body into a SourceDocument.

        Bodies that requests already inflated (Content-Encoding: gzip) are
        read as plain JSON.
        """
        if body[:2] == GZIP_MAGIC:
            try:
                body = gzip.decompress(body)
            except (OSError, EOFError, zlib.error) as e:
                raise FetchError(admin_level, f"could not decompress response: {e}") from e

        try:
            payload = json.loads(body)
        except ValueError as e:
            raise FetchError(admin_level, f"could not decode GeoJSON: {e}") from e

        if not isinstance(payload, dict):
            raise FetchError(admin_level, "response is not a GeoJSON object")

        try:
            return SourceDocument.model_validate(payload)
        except ValidationError as e:
            raise FetchError(admin_level, f"unexpected GeoJSON structure: {e}") from e

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()
