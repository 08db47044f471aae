"""Visual Memory backend API client implementation."""

import logging
from typing import List, Optional, Dict, Any
from datetime import datetime, timezone
from urllib.parse import quote
import httpx

from ...domain.entities import LocalImageFile, Screenshot, SearchResult
from ...domain.exceptions import MissingCredentialsError, RemoteServiceError
from ...domain.repositories import CredentialProvider, ScreenshotRepository
from ..config import Settings

logger = logging.getLogger(__name__)


def _parse_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO timestamp, treating naive values as UTC."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (TypeError, ValueError):
        logger.warning(f"Ignoring unparseable upload time: {value!r}")
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_screenshot(item: Dict[str, Any]) -> Screenshot:
    return Screenshot(
        filename=item["filename"],
        upload_time=_parse_datetime(item.get("upload_time")),
        text_content=item.get("text_content"),
        image_data=item.get("image_data")
    )


def _parse_search_result(item: Dict[str, Any]) -> SearchResult:
    return SearchResult(
        filename=item["filename"],
        upload_time=_parse_datetime(item.get("upload_time")),
        text_content=item.get("text_content"),
        image_data=item.get("image_data"),
        confidence_score=float(item.get("confidence_score") or 0.0),
        visual_description=item.get("visual_description") or ""
    )


def _error_detail(response: httpx.Response) -> Optional[str]:
    """Extract the backend's structured error detail, if any."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("detail"):
        detail = body["detail"]
        return detail if isinstance(detail, str) else str(detail)
    return None


class VisualMemoryClient(ScreenshotRepository):
    """Client for the Visual Memory API implementing the screenshot repository."""

    def __init__(
        self,
        settings: Settings,
        credentials: CredentialProvider,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.settings = settings
        self.base_url = str(settings.base_url).rstrip('/')
        self.credentials = credentials
        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.request_timeout, connect=settings.connect_timeout),
            transport=transport
        )

    def _auth_headers(self) -> Dict[str, str]:
        token = self.credentials.get_token()
        if not token:
            raise MissingCredentialsError()
        return {"Authorization": f"Bearer {token}"}

    def ensure_authenticated(self) -> None:
        """Raise MissingCredentialsError if no token is available."""
        self._auth_headers()

    async def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        """Send an authenticated request and return the decoded JSON body."""
        headers = self._auth_headers()
        url = f"{self.base_url}{path}"
        try:
            response = await self.client.request(method, url, headers=headers, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            detail = _error_detail(e.response)
            logger.error(f"HTTP {e.response.status_code} from {method} {path}: {detail or e}")
            raise RemoteServiceError(
                f"Request failed with status code {e.response.status_code}",
                status_code=e.response.status_code,
                detail=detail
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"HTTP error calling {method} {path}: {e}")
            raise RemoteServiceError(str(e) or type(e).__name__) from e

        if not response.content:
            return {}
        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON from {method} {path}: {e}")
            raise RemoteServiceError("Invalid response from server", status_code=response.status_code) from e
        return data if isinstance(data, dict) else {}

    async def list_screenshots(self) -> List[Screenshot]:
        """Get every screenshot stored for the user."""
        data = await self._request("GET", "/visual-memory/screenshots")
        screenshots = [_parse_screenshot(item) for item in data.get("screenshots") or []]
        logger.info(f"Retrieved {len(screenshots)} screenshots")
        return screenshots

    async def upload_screenshots(self, files: List[LocalImageFile]) -> List[Screenshot]:
        """Upload image files as one multipart request."""
        multipart = [("files", (f.name, f.content, f.content_type)) for f in files]
        data = await self._request("POST", "/visual-memory/upload-screenshots", files=multipart)
        results = [_parse_screenshot(item) for item in data.get("results") or []]
        logger.info(f"Uploaded {len(files)} files, backend returned {len(results)} results")
        return results

    async def search(self, text: str, max_results: int = 5) -> List[SearchResult]:
        """Run an enhanced natural-language search."""
        data = await self._request(
            "POST",
            "/visual-memory/enhanced-search",
            json={"text": text, "max_results": max_results}
        )
        results = [_parse_search_result(item) for item in data.get("results") or []]
        logger.info(f"Search for {text!r} returned {len(results)} results")
        return results

    async def delete_screenshot(self, filename: str) -> None:
        """Delete a stored screenshot by filename."""
        await self._request("DELETE", f"/visual-memory/screenshots/{quote(filename, safe='')}")
        logger.info(f"Deleted screenshot {filename}")

    async def migrate_existing_screenshots(self) -> int:
        """Ask the backend to backfill image data for old screenshots."""
        data = await self._request("POST", "/visual-memory/migrate-existing-screenshots", json={})
        processed = int(data.get("processed") or 0)
        logger.info(f"Migration processed {processed} screenshots")
        return processed

    async def cleanup(self) -> None:
        """Clean up HTTP client."""
        await self.client.aclose()
