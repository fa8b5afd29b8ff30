import os
import time
from datetime import datetime

from fastapi import APIRouter, Depends, Request

from qrselfie.context import AppContext, get_context
from qrselfie.core.routes import collect_routes

router = APIRouter(tags=["ops"])

# Store startup time for uptime calculation
startup_time = time.time()


@router.get("/health")
async def health(ctx: AppContext = Depends(get_context)):
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "uptime_seconds": round(time.time() - startup_time, 2),
        "photos": len(ctx.manifest),
        "process_id": os.getpid(),
    }


@router.get("/ops/routes")
async def list_routes(request: Request):
    routes = collect_routes(request.app)
    return {"count": len(routes), "routes": routes}
