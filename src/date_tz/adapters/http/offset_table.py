from __future__ import annotations

import logging
from typing import Optional

import httpx

from date_tz.infrastructure.offsets.file import records_from_json
from date_tz.infrastructure.offsets.static import StaticOffsetTable

logger = logging.getLogger(__name__)


class HttpOffsetTableClient:
    """Downloads a generated offset table published as JSON."""

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.url = url
        self.client = httpx.Client(timeout=timeout, transport=transport, headers={"Accept": "application/json"})
        logger.info(f"Initialized HttpOffsetTableClient with url={url}, timeout={timeout}")

    def fetch(self) -> StaticOffsetTable:
        try:
            response = self.client.get(self.url)
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as e:
            logger.error(f"Timeout downloading offset table: {e}")
            raise ConnectionError(f"Timeout downloading offset table: {e}") from e
        except httpx.ConnectError as e:
            logger.error(f"Failed to connect to offset table source: {e}")
            raise ConnectionError(f"Failed to connect to offset table source: {e}") from e
        except httpx.HTTPStatusError as e:
            logger.error(f"Offset table source returned error status {e.response.status_code}: {e.response.text}")
            raise ConnectionError(f"Offset table source error: {e.response.status_code} - {e.response.text}") from e
        except ValueError as e:
            logger.error(f"Offset table response is not valid JSON: {e}")
            raise ConnectionError(f"Offset table response is not valid JSON: {e}") from e

        table = StaticOffsetTable(records_from_json(data))
        logger.info(f"Downloaded {len(table)} zones from {self.url}")
        return table

    def close(self) -> None:
        self.client.close()
