"""Client-side draft of a memory being composed in the upload dialog."""

import mimetypes
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

# Preset tag chips shown before any custom or AI-suggested tags.
AVAILABLE_TAGS = [
    "Birthday",
    "Festival",
    "Vacation",
    "Achievement",
    "Family Gathering",
    "Anniversary",
    "Graduation",
    "Wedding",
]

# Photo formats the platform mimetypes table often lacks.
IMAGE_SUFFIXES = {
    ".heic": "image/heic",
    ".heif": "image/heif",
    ".avif": "image/avif",
    ".webp": "image/webp",
}


@dataclass
class SelectedFile:
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"

    @classmethod
    def from_path(cls, path: str | Path, content_type: str | None = None) -> "SelectedFile":
        path = Path(path)
        if content_type is None:
            content_type, _ = mimetypes.guess_type(path.name)
        if content_type is None:
            content_type = IMAGE_SUFFIXES.get(path.suffix.lower())
        return cls(
            filename=path.name,
            content=path.read_bytes(),
            content_type=content_type or "application/octet-stream",
        )


@dataclass
class MemoryDraft:
    """
    Ephemeral form state for a new memory.

    `tags` behaves as a set: every mutation goes through toggle_tag/merge_tags,
    which keep it free of duplicates. The list only preserves the order in
    which tags were chosen for display.
    """

    title: str = ""
    description: str = ""
    upload_date: date = field(default_factory=date.today)
    tags: list[str] = field(default_factory=list)
    file: SelectedFile | None = None

    def toggle_tag(self, tag: str) -> None:
        if tag in self.tags:
            self.tags.remove(tag)
        else:
            self.tags.append(tag)

    def merge_tags(self, new_tags: list[str]) -> None:
        """Union new_tags into the draft; never removes an existing tag."""
        for tag in new_tags:
            if tag not in self.tags:
                self.tags.append(tag)

    def has_text(self) -> bool:
        return bool(self.title.strip() or self.description.strip())

    def missing_fields(self) -> list[str]:
        """Names of the fields that must be filled before submitting."""
        missing = []
        if not self.title.strip():
            missing.append("title")
        if self.file is None:
            missing.append("file")
        return missing

    def tag_choices(self) -> list[tuple[str, bool]]:
        """Preset tags followed by custom ones, each with its selected flag."""
        extra = [t for t in self.tags if t not in AVAILABLE_TAGS]
        return [(tag, tag in self.tags) for tag in AVAILABLE_TAGS + extra]
