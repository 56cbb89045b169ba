import logging

from httpx import AsyncClient, TransportError
from pydantic import TypeAdapter, ValidationError

from shared_lib.schemas import TagPredictRequest, TagPrediction

logger = logging.getLogger(__name__)

_predictions_adapter = TypeAdapter(list[TagPrediction])


class TaggingClientError(Exception):
    """Base exception for all tagging service errors."""

    pass


class TaggingUnavailableError(TaggingClientError):
    """Tagging service is unreachable (connection error, timeout)."""

    pass


class TaggingRejectedError(TaggingClientError):
    """Tagging service answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class TagServiceClient:
    """Async client for the external AI tag suggestion service."""

    def __init__(self, base_url: str, timeout: float = 30.0):
        self._client = AsyncClient(base_url=base_url, timeout=timeout)

    async def close(self):
        """Close the HTTP client."""
        await self._client.aclose()

    async def predict_tags(
        self, title: str, description: str, top_k: int = 5
    ) -> list[TagPrediction]:
        """Ask the classifier for up to top_k tags for a title/description."""
        body = TagPredictRequest(title=title, description=description, top_k=top_k)
        try:
            response = await self._client.post(
                "/predict-tags/",
                json=body.model_dump(),
            )
        except TransportError as e:
            logger.exception("Failed to connect to tagging service")
            raise TaggingUnavailableError(f"Tagging service unavailable: {e}") from e

        if not response.is_success:
            logger.error(
                f"Failed to predict tags: {response.status_code} {response.text}"
            )
            raise TaggingRejectedError(
                f"Failed to predict tags: {response.status_code} {response.text}",
                status_code=response.status_code,
            )

        try:
            return _predictions_adapter.validate_python(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(f"Malformed tag prediction response: {response.text}")
            raise TaggingClientError(f"Malformed tag prediction response: {e}") from e
