"""Upload dialog controller.

Holds the draft of a new memory, asks the tagging service for suggestions and
submits the finished draft to the backend. The controller is in exactly one
DialogState at a time; a trigger that arrives while another operation is in
flight is refused rather than raced.
"""

import logging
from datetime import date
from typing import Any

from memory_client.backend_client import (
    BackendClient,
    BackendClientError,
    BackendRejectedError,
)
from memory_client.draft import MemoryDraft, SelectedFile
from memory_client.interfaces.base import DialogHost
from memory_client.tagging_client import (
    TaggingClientError,
    TaggingRejectedError,
    TagServiceClient,
)
from shared_lib.enums import DialogState

logger = logging.getLogger(__name__)

MSG_NEED_TEXT = "Please enter a title or description first!"
MSG_NEED_TITLE_AND_PHOTO = "Please add a title and choose a photo first!"
MSG_TAGS_FAILED = "Failed to generate tags from AI"
MSG_TAGGER_UNREACHABLE = "Error connecting to AI Tag Generator"
MSG_UPLOAD_OK = "Memory uploaded successfully!"
MSG_UPLOAD_FAILED = "Failed to upload memory"
MSG_UPLOAD_ERROR = "Something went wrong while uploading"


class UploadMemoryController:
    def __init__(
        self,
        host: DialogHost,
        tagger: TagServiceClient,
        backend: BackendClient,
        top_k: int = 5,
    ):
        self.host = host
        self.tagger = tagger
        self.backend = backend
        self.top_k = top_k
        self.draft = MemoryDraft()
        self.state = DialogState.idle
        # Bumped on every reset so late tag suggestions can be dropped.
        self._draft_version = 0

    @property
    def is_busy(self) -> bool:
        return self.state is not DialogState.idle

    def _enter(self, target: DialogState) -> bool:
        if self.state is not DialogState.idle:
            logger.info("Refusing %s while %s", target, self.state)
            return False
        self.state = target
        return True

    def _reset(self) -> None:
        self.draft = MemoryDraft()
        self._draft_version += 1

    # Field edits

    def set_title(self, title: str) -> None:
        self.draft.title = title

    def set_description(self, description: str) -> None:
        self.draft.description = description

    def set_upload_date(self, upload_date: date) -> None:
        self.draft.upload_date = upload_date

    def select_file(self, file: SelectedFile | None) -> None:
        self.draft.file = file

    def toggle_tag(self, tag: str) -> None:
        self.draft.toggle_tag(tag)

    def tag_choices(self) -> list[tuple[str, bool]]:
        return self.draft.tag_choices()

    # Operations

    async def generate_tags(self) -> list[str] | None:
        """
        Merge AI-suggested tags into the draft.

        Returns the suggested tags, or None if the request was not made, failed,
        or arrived after the draft had been reset.
        """
        if not self.draft.has_text():
            await self.host.alert(MSG_NEED_TEXT)
            return None

        if not self._enter(DialogState.generating_tags):
            return None

        version = self._draft_version
        try:
            predictions = await self.tagger.predict_tags(
                self.draft.title, self.draft.description, top_k=self.top_k
            )
        except TaggingRejectedError:
            await self.host.alert(MSG_TAGS_FAILED)
            return None
        except TaggingClientError as e:
            logger.error("Tag generation failed: %s", e)
            await self.host.alert(MSG_TAGGER_UNREACHABLE)
            return None
        finally:
            self.state = DialogState.idle

        ai_tags = [p.tag for p in predictions]
        if version != self._draft_version:
            logger.info("Draft was reset, discarding suggested tags %s", ai_tags)
            return None

        self.draft.merge_tags(ai_tags)
        await self.host.alert(f"AI suggested tags: {', '.join(ai_tags)}")
        return ai_tags

    async def submit(self) -> dict[str, Any] | None:
        """
        Upload the draft. Returns the record handed to the host on success.

        On failure the draft is left as it was so the user can retry.
        """
        if self.draft.missing_fields():
            await self.host.alert(MSG_NEED_TITLE_AND_PHOTO)
            return None

        if not self._enter(DialogState.uploading):
            return None

        draft = self.draft
        try:
            uploaded = await self.backend.add_media(draft)
        except BackendRejectedError as e:
            logger.error("Upload failed: %s", e)
            await self.host.alert(MSG_UPLOAD_FAILED)
            return None
        except BackendClientError as e:
            logger.error("Upload error: %s", e)
            await self.host.alert(MSG_UPLOAD_ERROR)
            return None
        finally:
            self.state = DialogState.idle

        record = {
            "text": draft.title,
            "description": draft.description,
            "upload_date": draft.upload_date.isoformat(),
            "tags_input": " ".join(draft.tags),
            "tags": ", ".join(draft.tags),
            "media": uploaded.media,
        }
        await self.host.alert(MSG_UPLOAD_OK)
        await self.host.on_success(record)
        await self.close()
        return record

    async def close(self) -> None:
        """Reset the draft and dismiss the dialog. Safe at any time."""
        self._reset()
        await self.host.on_close()
