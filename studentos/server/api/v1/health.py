"""Liveness and version endpoints for load balancers and deploy checks."""

from datetime import datetime, timezone

from fastapi import APIRouter

from studentos.server.core import constant

router = APIRouter()


@router.get(
    "/health",
    summary="Health Check",
    description="Report that the API process is up, with the current server time.",
)
async def health_check():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get(
    "/version",
    summary="Get Version",
    description="API release and response schema versions.",
)
async def version():
    return {"version": constant.API_VERSION, "schemaVersion": constant.SCHEMA_VERSION}
