"""
Upload a photo memory from the command line.
Usage: python -m memory_client.main --title TITLE --photo PATH [--tag TAG ...] [--ai-tags]
       [--content-type MIME]
"""

import argparse
import asyncio
import logging
import sys
from datetime import date

from memory_client.backend_client import BackendClient
from memory_client.config import ClientSettings, load_client_settings
from memory_client.controller import UploadMemoryController
from memory_client.draft import SelectedFile
from memory_client.interfaces.console import ConsoleHost
from memory_client.tagging_client import TagServiceClient

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Upload a photo memory")
    parser.add_argument("--title", required=True)
    parser.add_argument("--description", default="")
    parser.add_argument("--photo", required=True, help="path to the image file")
    parser.add_argument(
        "--content-type",
        default=None,
        help="MIME type of the photo, guessed from its suffix when omitted",
    )
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="timeline date (YYYY-MM-DD), defaults to today",
    )
    parser.add_argument("--tag", action="append", default=[], dest="tags")
    parser.add_argument(
        "--ai-tags",
        action="store_true",
        help="ask the tagging service for suggestions before uploading",
    )
    return parser


async def main(args: argparse.Namespace, config: ClientSettings) -> int:
    host = ConsoleHost()
    tagger = TagServiceClient(config.tagger_url, timeout=config.request_timeout)
    backend = BackendClient(config.backend_url, timeout=config.request_timeout)
    controller = UploadMemoryController(host, tagger, backend, top_k=config.tag_top_k)

    try:
        controller.set_title(args.title)
        controller.set_description(args.description)
        if args.date is not None:
            controller.set_upload_date(args.date)
        controller.select_file(SelectedFile.from_path(args.photo, args.content_type))
        for tag in args.tags:
            if tag not in controller.draft.tags:
                controller.toggle_tag(tag)

        if args.ai_tags:
            await controller.generate_tags()

        record = await controller.submit()
    finally:
        await tagger.close()
        await backend.close()

    return 0 if record is not None else 1


if __name__ == "__main__":
    parsed = build_parser().parse_args()
    sys.exit(asyncio.run(main(parsed, load_client_settings())))
