import logging
from typing import Optional

from nats.aio.client import Client as NATS

logger = logging.getLogger("response-core.messaging")


class NATSClient:
    """
    NATS Client wrapper with auto-reconnect.
    Carries the change stream between processes sharing one data store.
    """

    def __init__(self):
        self.nc = NATS()
        self.url: Optional[str] = None

    @property
    def is_connected(self) -> bool:
        return bool(self.nc and self.nc.is_connected)

    async def connect(self, url: str, client_name: str):
        """
        Connects to NATS with resilience settings.
        """
        try:
            await self.nc.connect(
                servers=[url],
                name=client_name,
                reconnect_time_wait=2,
                max_reconnect_attempts=-1,  # Infinite reconnects
                error_cb=self._error_cb,
                disconnected_cb=self._disconnected_cb,
                reconnected_cb=self._reconnected_cb,
            )
            self.url = url
            logger.info(f"Connected to NATS at {url}")
        except Exception as e:
            logger.error(f"Failed to connect to NATS: {e}")
            raise

    async def close(self):
        """
        Gracefully closes the NATS connection.
        """
        if self.nc.is_connected:
            await self.nc.drain()
            logger.info("NATS connection closed.")

    async def _error_cb(self, e):
        logger.error(f"NATS Error: {e}")

    async def _disconnected_cb(self):
        logger.warning("Disconnected from NATS...")

    async def _reconnected_cb(self):
        logger.info("Reconnected to NATS!")


nats_client = NATSClient()
