from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

router = APIRouter()

@router.get("/health")
async def health() -> dict[str, str]:
    """
    Liveness probe.
    Returns 200 OK if the process is alive.
    Used by Kubernetes to determine if the container should be restarted.
    """
    # The statistics are pure functions over the request body: no database,
    # cache or background task can go stale, so a live process is a healthy one.
    return {"status": "ok"}

@router.get("/ready")
async def ready(request: Request):
    """
    Readiness probe.
    Returns 200 OK once the application lifespan has started.
    Returns 503 before startup and after shutdown.
    """
    # create_app() stores a callable reading READY_FLAG on app.state
    ready_flag = getattr(request.app.state, "ready_flag", None)
    if ready_flag and ready_flag():
        return {"status": "ready"}
    return JSONResponse({"status": "not ready"}, status_code=HTTP_503_SERVICE_UNAVAILABLE)
