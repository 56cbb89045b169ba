from datetime import date
from unittest.mock import AsyncMock

import httpx
import pytest

from memory_client import main as cli
from memory_client.config import ClientSettings
from shared_lib.schemas import TagPrediction, UploadResponse


@pytest.fixture
def photo(tmp_path):
    path = tmp_path / "beach.jpg"
    path.write_bytes(b"jpeg-bytes")
    return path


@pytest.fixture
def fake_clients(monkeypatch):
    tagger = AsyncMock()
    tagger.predict_tags = AsyncMock(return_value=[TagPrediction(tag="Outdoor")])
    backend = AsyncMock()
    backend.add_media = AsyncMock(return_value=UploadResponse(media="img1.jpg"))
    monkeypatch.setattr(cli, "TagServiceClient", lambda *a, **kw: tagger)
    monkeypatch.setattr(cli, "BackendClient", lambda *a, **kw: backend)
    return tagger, backend


def test_parser_collects_tags():
    args = cli.build_parser().parse_args(
        ["--title", "Beach Day", "--photo", "a.jpg", "--tag", "Vacation", "--tag", "Outdoor",
         "--date", "2026-07-04"]
    )
    assert args.tags == ["Vacation", "Outdoor"]
    assert args.date == date(2026, 7, 4)
    assert args.ai_tags is False


async def test_main_uploads_with_ai_tags(photo, fake_clients):
    tagger, backend = fake_clients
    args = cli.build_parser().parse_args(
        ["--title", "Beach Day", "--photo", str(photo), "--tag", "Vacation", "--ai-tags"]
    )

    exit_code = await cli.main(args, ClientSettings())

    assert exit_code == 0
    draft = backend.add_media.await_args.args[0]
    assert draft.title == "Beach Day"
    assert draft.tags == ["Vacation", "Outdoor"]
    assert draft.file.filename == "beach.jpg"
    tagger.close.assert_awaited_once()
    backend.close.assert_awaited_once()


async def test_main_reports_failed_upload(photo, fake_clients):
    from memory_client.backend_client import BackendRejectedError

    _, backend = fake_clients
    backend.add_media.side_effect = BackendRejectedError("Upload failed: 500", status_code=500)
    args = cli.build_parser().parse_args(["--title", "Beach Day", "--photo", str(photo)])

    assert await cli.main(args, ClientSettings()) == 1


async def test_main_passes_content_type(tmp_path, fake_clients):
    _, backend = fake_clients
    photo = tmp_path / "scan.bin"
    photo.write_bytes(b"raw")
    args = cli.build_parser().parse_args(
        ["--title", "Scan", "--photo", str(photo), "--content-type", "image/tiff"]
    )

    assert await cli.main(args, ClientSettings()) == 0
    draft = backend.add_media.await_args.args[0]
    assert draft.file.content_type == "image/tiff"


async def test_main_dropped_connection_exits_nonzero(photo, monkeypatch, backend, mock_transport):
    mock_transport.set_error("POST /add-media", httpx.RemoteProtocolError("server disconnected"))
    monkeypatch.setattr(cli, "TagServiceClient", lambda *a, **kw: AsyncMock())
    monkeypatch.setattr(cli, "BackendClient", lambda *a, **kw: backend)
    args = cli.build_parser().parse_args(["--title", "Beach Day", "--photo", str(photo)])

    assert await cli.main(args, ClientSettings()) == 1
