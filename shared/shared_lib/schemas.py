from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from shared_lib.enums import DeliveryStatus


# Tagging service schemas
class TagPredictRequest(BaseModel):
    title: str
    description: str
    top_k: int = 5


class TagPrediction(BaseModel):
    """One suggestion from the tagging service; extra keys (score, ...) are kept."""

    model_config = ConfigDict(extra="allow")

    tag: str


# Upload endpoint schemas
class UploadResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    media: str
    id: str | None = None
    tags: list[str] = []
    created_at: datetime | None = None


class MemoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    upload_date: date
    media: str
    content_type: str | None
    tags: list[str]
    created_at: datetime


# Mail schemas
class MailMessage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    to: str | list[str]
    sender: str = Field(alias="from")
    subject: str
    html: str

    def to_provider_params(self) -> dict:
        """Render the message in the provider's field names."""
        return self.model_dump(by_alias=True)


class Delivered(BaseModel):
    status: Literal[DeliveryStatus.delivered] = DeliveryStatus.delivered
    message_id: str

    @property
    def ok(self) -> bool:
        return True


class Failed(BaseModel):
    status: Literal[DeliveryStatus.failed] = DeliveryStatus.failed
    reason: str

    @property
    def ok(self) -> bool:
        return False


DeliveryResult = Delivered | Failed
