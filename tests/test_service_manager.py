from unittest.mock import AsyncMock, MagicMock

import pytest

from response_core.service_manager.service_manager import ServiceManager


def _service(name, calls, fail_start=False):
    service = MagicMock()
    service.name = name

    async def start():
        if fail_start:
            raise RuntimeError(f"{name} failed")
        calls.append(f"start:{name}")

    async def stop():
        calls.append(f"stop:{name}")

    service.start = AsyncMock(side_effect=start)
    service.stop = AsyncMock(side_effect=stop)
    return service


@pytest.mark.asyncio
async def test_start_in_order_stop_in_reverse():
    calls = []
    manager = ServiceManager()
    for name in ("store", "scheduler", "api"):
        manager.register(_service(name, calls))

    await manager.start_all()
    assert manager.running
    await manager.stop_all()
    assert not manager.running
    assert calls == [
        "start:store", "start:scheduler", "start:api",
        "stop:api", "stop:scheduler", "stop:store",
    ]


@pytest.mark.asyncio
async def test_failed_start_unwinds_started_services():
    calls = []
    manager = ServiceManager()
    manager.register(_service("scheduler", calls))
    manager.register(_service("api", calls, fail_start=True))

    with pytest.raises(RuntimeError):
        await manager.start_all()
    assert calls == ["start:scheduler", "stop:scheduler"]
