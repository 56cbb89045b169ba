import logging

from httpx import AsyncClient, TransportError
from pydantic import ValidationError

from memory_client.draft import MemoryDraft
from shared_lib.schemas import UploadResponse

logger = logging.getLogger(__name__)


class BackendClientError(Exception):
    """Base exception for all upload endpoint errors."""

    pass


class BackendUnavailableError(BackendClientError):
    """Backend is unreachable (connection error, timeout)."""

    pass


class BackendRejectedError(BackendClientError):
    """Backend answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


def build_upload_form(draft: MemoryDraft) -> tuple[dict, dict]:
    """
    Package a draft as multipart (data, files) for POST /add-media.

    Each tag becomes its own repeated `tags` field, and `tags_input` carries
    the same tags space-joined for servers that read a single string.
    """
    data = {
        "text": draft.title,
        "description": draft.description,
        "upload_date": draft.upload_date.isoformat(),
        "tags": list(draft.tags),
        "tags_input": " ".join(draft.tags),
    }
    files = {}
    if draft.file is not None:
        files["files"] = (
            draft.file.filename,
            draft.file.content,
            draft.file.content_type,
        )
    return data, files


class BackendClient:
    """Async client for the application's own upload endpoint.

    The underlying httpx client keeps a cookie jar, so session cookies set by
    the backend are sent back on every request.
    """

    def __init__(self, base_url: str, timeout: float = 30.0, cookies: dict | None = None):
        self._client = AsyncClient(base_url=base_url, timeout=timeout, cookies=cookies)

    async def close(self):
        """Close the HTTP client."""
        await self._client.aclose()

    async def add_media(self, draft: MemoryDraft) -> UploadResponse:
        """Upload a draft and its photo. Returns the created media reference."""
        data, files = build_upload_form(draft)
        try:
            response = await self._client.post("/add-media", data=data, files=files)
        except TransportError as e:
            logger.exception("Failed to connect to backend")
            raise BackendUnavailableError(f"Backend unavailable: {e}") from e

        if not response.is_success:
            logger.error(
                f"Upload failed: {response.status_code} {response.text}"
            )
            raise BackendRejectedError(
                f"Upload failed: {response.status_code} {response.text}",
                status_code=response.status_code,
            )

        try:
            return UploadResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(f"Malformed upload response: {response.text}")
            raise BackendClientError(f"Malformed upload response: {e}") from e
