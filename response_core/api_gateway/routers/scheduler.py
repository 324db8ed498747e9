from dataclasses import asdict

from fastapi import APIRouter, Depends

from ..deps import get_core

router = APIRouter()


@router.post("/run")
async def run_pass(core=Depends(get_core)):
    """Run one scheduler pass now. Reports ``skipped`` if a pass is already running."""
    report = await core.scheduler.run_pass()
    return asdict(report)
