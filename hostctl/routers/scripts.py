"""Script execution endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from hostctl.auth import require_api_key
from hostctl.models.commands import InvocationRequest
from hostctl.models.responses import RunScriptResponse
from hostctl.services.process_runner import ProcessError, ProcessRunner, process_runner

router = APIRouter(
    prefix="/scripts",
    tags=["scripts"],
    dependencies=[Depends(require_api_key)],
)


async def run_invocation(
    req: InvocationRequest,
    *,
    runner: ProcessRunner | None = None,
) -> RunScriptResponse:
    """Run one invocation and fold its failure into the response."""
    _runner = runner or process_runner
    try:
        output = await _runner.run(
            req.executable, req.arguments, req.stdin, timeout=req.timeout,
        )
    except ProcessError as exc:
        return RunScriptResponse(success=False, error=str(exc))
    return RunScriptResponse(success=True, output=output)


@router.post("/run", response_model=RunScriptResponse)
async def run_script(req: InvocationRequest) -> RunScriptResponse:
    """Run an executable or script and return its captured output."""
    return await run_invocation(req)
