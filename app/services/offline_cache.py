"""
Offline cache shell for the JourneyGo frontend.

Mirrors the browser service worker on the server side: a named cache
generation is installed with the app-shell assets, older generations are
removed on activate, and requests are served cache-first with a network
fallback and finally the cached root document.
"""

import json
import logging
from typing import Awaitable, Callable, Dict, List, Optional

import httpx
from pydantic import BaseModel

from app.config import settings

logger = logging.getLogger(__name__)

ROOT_DOCUMENT = "/index.html"


class CachedAsset(BaseModel):
    """A stored response for one asset path."""

    url: str
    status_code: int = 200
    content: bytes = b""
    media_type: Optional[str] = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class OfflineCacheError(Exception):
    """The app shell could not be installed."""


Network = Callable[[str], Awaitable[CachedAsset]]


class CacheStorage:
    """Named caches of path -> asset, like the browser's CacheStorage."""

    def __init__(self):
        self._caches: Dict[str, Dict[str, CachedAsset]] = {}

    async def open(self, name: str) -> Dict[str, CachedAsset]:
        return self._caches.setdefault(name, {})

    async def keys(self) -> List[str]:
        return list(self._caches)

    async def delete(self, name: str) -> bool:
        return self._caches.pop(name, None) is not None

    async def match(self, url: str) -> Optional[CachedAsset]:
        """First cached entry for `url` across all caches, in creation order."""
        for cache in self._caches.values():
            if url in cache:
                return cache[url]
        return None


class HttpNetwork:
    """Fetches assets from the frontend origin."""

    def __init__(self, base_url: str, timeout: float = 10.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def __call__(self, url: str) -> CachedAsset:
        async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self.transport) as client:
            response = await client.get(url)
        return CachedAsset(
            url=url,
            status_code=response.status_code,
            content=response.content,
            media_type=response.headers.get("content-type"),
        )


class OfflineCacheShell:
    """Install / activate / fetch lifecycle for one cache generation."""

    def __init__(
        self,
        cache_name: str,
        assets: List[str],
        storage: CacheStorage,
        network: Network,
        fallback_url: str = ROOT_DOCUMENT,
    ):
        self.cache_name = cache_name
        self.assets = list(assets)
        self.storage = storage
        self.network = network
        self.fallback_url = fallback_url

    async def install(self) -> None:
        """
        Populate the current cache with every asset.

        All assets are fetched before anything is stored, so a single failure
        leaves the cache untouched.
        """
        fetched = []
        for url in self.assets:
            try:
                asset = await self.network(url)
            except httpx.HTTPError as exc:
                raise OfflineCacheError(f"Could not fetch {url}: {exc}") from exc
            if not asset.ok:
                raise OfflineCacheError(f"Could not fetch {url}: status {asset.status_code}")
            fetched.append(asset)

        cache = await self.storage.open(self.cache_name)
        for asset in fetched:
            cache[asset.url] = asset
        logger.info(f"Caching app shell in {self.cache_name} ({len(fetched)} assets)")

    async def activate(self) -> List[str]:
        """Delete every cache generation except the current one."""
        deleted = []
        for name in await self.storage.keys():
            if name != self.cache_name:
                logger.info(f"Deleting old cache: {name}")
                await self.storage.delete(name)
                deleted.append(name)
        return deleted

    async def fetch(self, url: str) -> Optional[CachedAsset]:
        """Cache first, then network, then the cached root document."""
        cached = await self.storage.match(url)
        if cached is not None:
            return cached

        try:
            return await self.network(url)
        except httpx.HTTPError as exc:
            logger.warning(f"Network fetch failed for {url}, serving fallback: {exc}")
            return await self.storage.match(self.fallback_url)


SERVICE_WORKER_TEMPLATE = """const CACHE_NAME = {cache_name};
const urlsToCache = {assets};

self.addEventListener("install", (event) => {{
  event.waitUntil(
    caches.open(CACHE_NAME).then((cache) => cache.addAll(urlsToCache))
  );
  self.skipWaiting();
}});

self.addEventListener("activate", (event) => {{
  event.waitUntil(
    caches.keys().then((keys) =>
      Promise.all(
        keys.filter((key) => key !== CACHE_NAME).map((key) => caches.delete(key))
      )
    )
  );
  self.clients.claim();
}});

self.addEventListener("fetch", (event) => {{
  event.respondWith(
    caches.match(event.request).then(
      (response) =>
        response || fetch(event.request).catch(() => caches.match({fallback}))
    )
  );
}});
"""


def render_service_worker(cache_name: str, assets: List[str], fallback_url: str = ROOT_DOCUMENT) -> str:
    """Browser service worker script for the given cache generation."""
    return SERVICE_WORKER_TEMPLATE.format(
        cache_name=json.dumps(cache_name),
        assets=json.dumps(assets, indent=2),
        fallback=json.dumps(fallback_url),
    )


def build_offline_shell(storage: Optional[CacheStorage] = None) -> OfflineCacheShell:
    """Shell for the configured cache version, fetching from the frontend origin."""
    return OfflineCacheShell(
        cache_name=settings.cache_name,
        assets=settings.cache_assets,
        storage=storage or CacheStorage(),
        network=HttpNetwork(settings.frontend_url),
    )


# Global instance
offline_shell = build_offline_shell()
