import asyncio
from typing import Any

import aiohttp
from aiohttp import (
    ClientConnectorError,
    ClientPayloadError,
    ClientResponseError,
    ContentTypeError,
    ServerDisconnectedError,
)

from src.config.logger_config import logger
from src.geosite.application.contracts import ReleaseAsset, ReleaseInfo
from src.geosite.application.errors import ReleaseFetchError

DEFAULT_API_URL = "https://api.github.com"
USER_AGENT = "sing-geosite-generator"


class GitHubReleaseClient:
    def __init__(
        self,
        access_token: str | None = None,
        api_url: str = DEFAULT_API_URL,
        retries: int = 3,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.retries = retries
        self._access_token = access_token

    async def fetch_latest_release(self, session: aiohttp.ClientSession, repository: str) -> ReleaseInfo:
        owner, _, name = repository.partition("/")
        if not owner or not name:
            raise ValueError(f"Repository must be 'owner/name': {repository}")
        url = f"{self.api_url}/repos/{owner}/{name}/releases/latest"
        payload = await self._request(session, url, expect_json=True, operation="fetch_latest_release")
        release = self._parse_release(repository, payload)
        logger.info(
            "Latest release fetched: repository={}, name={}, tag_name={}, asset_count={}",
            repository,
            release.name,
            release.tag_name,
            len(release.assets),
        )
        return release

    async def download(self, session: aiohttp.ClientSession, url: str) -> bytes:
        logger.info("download {}", url)
        return await self._request(session, url, expect_json=False, operation="download")

    @staticmethod
    def _parse_release(repository: str, payload: dict[str, Any]) -> ReleaseInfo:
        assets = tuple(
            ReleaseAsset(name=str(asset.get("name") or ""), download_url=str(asset.get("browser_download_url") or ""))
            for asset in payload.get("assets", [])
        )
        tag_name = str(payload.get("tag_name") or "")
        return ReleaseInfo(
            repository=repository,
            name=str(payload.get("name") or tag_name),
            tag_name=tag_name,
            assets=assets,
        )

    async def _request(
        self,
        session: aiohttp.ClientSession,
        url: str,
        *,
        expect_json: bool,
        operation: str,
    ) -> Any:
        timeout = aiohttp.ClientTimeout(total=300, connect=10)
        headers = {"User-Agent": USER_AGENT}
        if expect_json:
            headers["Accept"] = "application/vnd.github+json"
        if self._access_token:
            headers["Authorization"] = f"Bearer {self._access_token}"
        last_error: Exception | None = None
        for attempt in range(1, self.retries + 1):
            try:
                async with session.get(url, headers=headers, timeout=timeout) as resp:
                    if resp.status >= 500 or resp.status == 429:
                        logger.warning(
                            "Server error {}. operation={}, attempt {}/{}",
                            resp.status,
                            operation,
                            attempt,
                            self.retries,
                        )
                        raise ClientResponseError(
                            resp.request_info,
                            resp.history,
                            status=resp.status,
                            message="Server Error",
                        )
                    if resp.status != 200:
                        body = await resp.text()
                        logger.error("HTTP {} for {}: {}", resp.status, url, body)
                        raise ReleaseFetchError(f"{operation} failed: HTTP {resp.status} for {url}")
                    if expect_json:
                        return await resp.json()
                    return await resp.read()
            except (
                ClientResponseError,
                ClientConnectorError,
                ServerDisconnectedError,
                asyncio.TimeoutError,
                ClientPayloadError,
                ContentTypeError,
            ) as exc:
                last_error = exc
                if attempt == self.retries:
                    break
                wait_time = 2**attempt
                logger.warning("Connection unstable ({}). Retrying in {}s...", exc, wait_time)
                await asyncio.sleep(wait_time)

        logger.error("Failed after {} attempts. operation={}, error={}", self.retries, operation, last_error)
        raise ReleaseFetchError(f"{operation} failed after {self.retries} attempts: {last_error}") from last_error
