import logging
from typing import List, Protocol

logger = logging.getLogger("response-core.service-manager")


class Service(Protocol):
    async def start(self):
        ...

    async def stop(self):
        ...

    @property
    def name(self) -> str:
        ...


class ServiceManager:
    """
    Starts registered services in registration order and stops them in reverse.
    A failed start stops whatever already started, then re-raises.
    """
    def __init__(self):
        self.services: List[Service] = []
        self._started: List[Service] = []

    @property
    def running(self) -> bool:
        return bool(self._started)

    def register(self, service: Service):
        self.services.append(service)
        logger.info(f"Registered service: {service.name}")

    async def start_all(self):
        logger.info("Starting all services...")
        for service in self.services:
            try:
                logger.info(f"Starting {service.name}...")
                await service.start()
                self._started.append(service)
                logger.info(f"Started {service.name}")
            except Exception as e:
                logger.error(f"Failed to start {service.name}: {e}")
                await self.stop_all()
                raise

    async def stop_all(self):
        logger.info("Stopping all services...")
        while self._started:
            service = self._started.pop()
            try:
                logger.info(f"Stopping {service.name}...")
                await service.stop()
                logger.info(f"Stopped {service.name}")
            except Exception as e:
                logger.error(f"Failed to stop {service.name}: {e}", exc_info=True)
