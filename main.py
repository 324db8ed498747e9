import asyncio
import logging

from response_core.api_gateway.service import APIGatewayService
from response_core.bootstrap import build_core
from response_core.config import settings
from response_core.logger import setup_logging
from response_core.messaging.change_stream import NatsChangeStream
from response_core.messaging.nats_client import nats_client
from response_core.service_manager.service_manager import ServiceManager
from response_core.utils import print_banner

logger = logging.getLogger("response-core")


async def main():
    """
    Main entry point for the response core.
    Wires the components, then runs the lifecycle scheduler and the API gateway
    until cancelled.
    """
    setup_logging()
    print_banner("Response-Core")
    logger.info("Starting Response-Core...")

    change_stream = None
    if settings.NATS_URL:
        try:
            await nats_client.connect(settings.NATS_URL, settings.NATS_CLIENT_ID)
            change_stream = NatsChangeStream(nats_client, settings.CHANGE_SUBJECT_PREFIX)
        except Exception as e:
            logger.error(f"Failed to connect to NATS during startup: {e}")
            # Proceeding with in-process change notifications

    core = await build_core(
        settings,
        change_stream=change_stream,
        create_tables=settings.ENVIRONMENT != "production",
    )

    service_manager = ServiceManager()
    service_manager.register(core.scheduler)
    if settings.API_ENABLED:
        service_manager.register(APIGatewayService(core, host=settings.API_HOST, port=settings.API_PORT))

    await service_manager.start_all()

    try:
        # Keep the main loop running
        while True:
            await asyncio.sleep(1)
    except asyncio.CancelledError:
        logger.info("Response-Core shutting down...")
        await service_manager.stop_all()
        await core.aclose()
        await nats_client.close()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Response-Core stopped by user.")
