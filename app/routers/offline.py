"""Offline cache shell routes: the service worker script and cached app assets."""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from app.config import settings
from app.services.offline_cache import (
    OfflineCacheShell,
    offline_shell,
    render_service_worker,
)

router = APIRouter(tags=["offline"])


def get_offline_shell() -> OfflineCacheShell:
    return offline_shell


@router.get("/service-worker.js")
async def service_worker():
    """Service worker for the current cache version."""
    script = render_service_worker(settings.cache_name, settings.cache_assets)
    return Response(
        content=script,
        media_type="application/javascript",
        headers={"Cache-Control": "no-cache"},
    )


@router.get("/app/{path:path}")
async def app_asset(
    path: str,
    shell: OfflineCacheShell = Depends(get_offline_shell),
):
    """Serve a frontend asset through the offline cache shell."""
    asset = await shell.fetch(f"/{path}")
    if asset is None:
        raise HTTPException(status_code=503, detail="You are offline and this page is not cached")

    return Response(
        content=asset.content,
        status_code=asset.status_code,
        media_type=asset.media_type,
    )
