"""Memory upload and read endpoints."""

import asyncio
import logging
import uuid
from datetime import date

import aiosqlite
from fastapi import (
    APIRouter,
    BackgroundTasks,
    Depends,
    File,
    Form,
    HTTPException,
    Request,
    UploadFile,
    status,
)

from core_svc.database import get_db
from core_svc.mailer import MailDispatcher, render_new_memory_email
from core_svc.storage import remove_media, save_media
from core_svc.utils import parse_db_datetime, resolve_tags
from shared_lib.config import Settings, load_config
from shared_lib.schemas import MemoryResponse, UploadResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["memories"])


def get_config() -> Settings:
    """FastAPI dependency returning the current settings."""
    return load_config()


def get_mailer(request: Request) -> MailDispatcher | None:
    """FastAPI dependency returning the dispatcher stored on app.state, if any."""
    return getattr(request.app.state, "mailer", None)


async def _fetch_tags(db: aiosqlite.Connection, memory_id: str) -> list[str]:
    cursor = await db.execute(
        "SELECT tag FROM memory_tags WHERE memory_id = ? ORDER BY position",
        (memory_id,),
    )
    return [row["tag"] for row in await cursor.fetchall()]


async def _build_memory(db: aiosqlite.Connection, row: aiosqlite.Row) -> MemoryResponse:
    return MemoryResponse(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        upload_date=date.fromisoformat(row["upload_date"]),
        media=row["media"],
        content_type=row["content_type"],
        tags=await _fetch_tags(db, row["id"]),
        created_at=parse_db_datetime(row["created_at"]),
    )


async def notify_new_memory(
    mailer: MailDispatcher,
    config: Settings,
    title: str,
    description: str,
    upload_date: str,
    tags: list[str],
) -> None:
    """Background task: email the configured address about a new memory."""
    subject, html = render_new_memory_email(title, description, upload_date, tags)
    result = await mailer.send_mail(config.notify_email, config.mail_from, subject, html)
    if not result.ok:
        logger.warning("New memory notification not delivered: %s", result.reason)


@router.post(
    "/add-media",
    response_model=UploadResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_media(
    background_tasks: BackgroundTasks,
    text: str = Form(...),
    description: str = Form(""),
    upload_date: date | None = Form(None),
    tags: list[str] = Form([]),
    tags_input: str = Form(""),
    files: list[UploadFile] = File(...),
    db: aiosqlite.Connection = Depends(get_db),
    config: Settings = Depends(get_config),
    mailer: MailDispatcher | None = Depends(get_mailer),
) -> UploadResponse:
    """
    Create a memory from a multipart upload.

    - text (title) must be non-blank, otherwise 422
    - the first part of `files` is the memory's photo; non-images get 415
    - tags = repeated `tags` fields, or the split of `tags_input` when none are sent
    - photo is written to image_storage_path, then memory + tags are inserted
    - if notify_email is set, a notification email is queued in the background
    """
    title = text.strip()
    if not title:
        raise HTTPException(status_code=422, detail="Title must not be empty")

    upload = files[0]
    content_type = upload.content_type or ""
    if not content_type.startswith("image/"):
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail=f"Unsupported media type: {content_type or 'unknown'}",
        )

    memory_tags = resolve_tags(tags, tags_input)
    memory_date = (upload_date or date.today()).isoformat()

    content = await upload.read()
    media, media_path = await asyncio.to_thread(
        save_media, config.image_storage_path, upload.filename, content
    )

    memory_id = str(uuid.uuid4())
    try:
        await db.execute(
            """
            INSERT INTO memories (id, title, description, upload_date, media, media_path, content_type)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (memory_id, title, description, memory_date, media, media_path, content_type),
        )
        await db.executemany(
            "INSERT INTO memory_tags (memory_id, tag, position) VALUES (?, ?, ?)",
            [(memory_id, tag, position) for position, tag in enumerate(memory_tags)],
        )
        await db.commit()
    except Exception:
        await db.rollback()
        await asyncio.to_thread(remove_media, media_path)
        raise

    logger.info("Created memory %s (%s) with tags %s", memory_id, media, memory_tags)

    if config.notify_email and mailer is not None:
        background_tasks.add_task(
            notify_new_memory, mailer, config, title, description, memory_date, memory_tags
        )

    cursor = await db.execute("SELECT created_at FROM memories WHERE id = ?", (memory_id,))
    row = await cursor.fetchone()

    return UploadResponse(
        id=memory_id,
        media=media,
        tags=memory_tags,
        created_at=parse_db_datetime(row["created_at"]),
    )


@router.get("/memories", response_model=list[MemoryResponse])
async def list_memories(
    tag: str | None = None,
    db: aiosqlite.Connection = Depends(get_db),
) -> list[MemoryResponse]:
    """List memories newest first, optionally only those carrying `tag`."""
    if tag is None:
        cursor = await db.execute(
            "SELECT * FROM memories ORDER BY created_at DESC, rowid DESC"
        )
    else:
        cursor = await db.execute(
            """
            SELECT m.* FROM memories m
            JOIN memory_tags t ON t.memory_id = m.id
            WHERE t.tag = ?
            ORDER BY m.created_at DESC, m.rowid DESC
            """,
            (tag,),
        )
    rows = await cursor.fetchall()
    return [await _build_memory(db, row) for row in rows]


@router.get("/memories/{id}", response_model=MemoryResponse)
async def get_memory(
    id: str,
    db: aiosqlite.Connection = Depends(get_db),
) -> MemoryResponse:
    """Fetch a memory by ID with its tags; 404 if missing."""
    cursor = await db.execute("SELECT * FROM memories WHERE id = ?", (id,))
    row = await cursor.fetchone()

    if row is None:
        raise HTTPException(status_code=404, detail="Memory not found")

    return await _build_memory(db, row)
