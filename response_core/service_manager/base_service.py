from abc import ABC, abstractmethod


class BaseService(ABC):
    """
    A long-running component with an explicit start/stop lifecycle.
    Subclasses flip ``_running`` in their own start/stop; the ServiceManager
    only relies on ``name``, ``start`` and ``stop``.
    """
    def __init__(self, name: str):
        self._name = name
        self._running = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def running(self) -> bool:
        return self._running

    @abstractmethod
    async def start(self):
        ...

    @abstractmethod
    async def stop(self):
        ...

    def __repr__(self):
        state = "running" if self._running else "stopped"
        return f"<{self.__class__.__name__}({self._name}, {state})>"
