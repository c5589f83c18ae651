"""Power control and host information endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from hostctl.auth import require_api_key
from hostctl.models.responses import FontsResponse, ShutdownRequest, ShutdownResponse
from hostctl.models.system import SystemSnapshot
from hostctl.services import sysinfo
from hostctl.services.command_table import shutdown_message
from hostctl.services.shutdown import shutdown_orchestrator

router = APIRouter(
    prefix="/system",
    tags=["system"],
    dependencies=[Depends(require_api_key)],
)


@router.post(
    "/shutdown",
    response_model=ShutdownResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def schedule_shutdown(req: ShutdownRequest) -> ShutdownResponse:
    """Schedule a delayed shutdown; outcomes are only logged."""
    shutdown_orchestrator.schedule_shutdown(req.minutes)
    return ShutdownResponse(scheduled=True, message=shutdown_message(req.minutes))


@router.get("/info", response_model=SystemSnapshot)
async def system_info() -> SystemSnapshot:
    snapshot = await sysinfo.collect_system_snapshot()
    if snapshot is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="System information unavailable",
        )
    return snapshot


@router.get("/fonts", response_model=FontsResponse)
async def installed_fonts() -> FontsResponse:
    return FontsResponse(families=await sysinfo.list_font_families())
