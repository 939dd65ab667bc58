import argparse
import asyncio
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from core.errors import BriefingError, MalformedPayloadError
from core.schemas import BriefingDocument
from services.config import Config, load_config
from services.logging import setup_logging
from storage.store_factory import create_store
from workflows.pipeline_factory import create_pipeline

logger = logging.getLogger(__name__)


def write_output(document: BriefingDocument, output_path: str) -> Path:
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(document.to_json(), encoding="utf-8")
    return path


async def scrape(config: Config, source: str, output_path: str, push: bool) -> None:
    start_time = time.perf_counter()

    # Resolve everything that needs credentials before the run starts
    pipeline = create_pipeline(config, source)
    store = create_store(config) if push else None

    logger.info(f"Starting {pipeline.name} briefing run")
    document = await pipeline.run()

    path = write_output(document, output_path)
    logger.info(
        f"Briefing saved to {path}: {len(document.posts)} posts, "
        f"{len(document.accounts_to_follow)} accounts"
    )

    if store is not None:
        await store.save(document)
        logger.info(f"Briefing pushed via {store.name}")

    end_time = time.perf_counter()
    logger.info(f"Total time: {end_time - start_time:.1f}s")


async def push(config: Config, input_path: str) -> None:
    store = create_store(config)

    try:
        data = Path(input_path).read_text(encoding="utf-8")
    except OSError as e:
        raise BriefingError(
            f"Could not read {input_path}. Run 'twitter-briefing scrape' first to generate the briefing."
        ) from e

    try:
        BriefingDocument.from_json(data)
    except ValidationError as e:
        raise BriefingError(f"{input_path} is not a valid briefing: {e}") from e

    logger.info(f"Pushing briefing data via {store.name}...")
    await store.put(data)
    logger.info("Done! Briefing data pushed to the 'latest' key.")


def serve(config: Config, host: Optional[str], port: Optional[int]) -> None:
    from web.app import create_app

    app = create_app(create_store(config))
    app.run(host=host or config.web.host, port=port or config.web.port)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="twitter-briefing",
        description="Build, publish and serve the daily Twitter briefing.",
    )
    parser.add_argument("--config", help="Path to config.yml (default: resources/config.yml)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    scrape_parser = subparsers.add_parser("scrape", help="Collect, rank and save a new briefing")
    scrape_parser.add_argument("--source", choices=["browser", "remote"], default="remote")
    scrape_parser.add_argument("--output", help="Where to write the briefing JSON")
    scrape_parser.add_argument("--push", action="store_true", help="Also push to the configured store")

    push_parser = subparsers.add_parser("push", help="Push a saved briefing to the store")
    push_parser.add_argument("--input", help="Briefing JSON to push")

    serve_parser = subparsers.add_parser("serve", help="Serve the briefing page and JSON API")
    serve_parser.add_argument("--host")
    serve_parser.add_argument("--port", type=int)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        config = load_config(args.config)

        if args.command == "scrape":
            asyncio.run(scrape(config, args.source, args.output or config.output_path, args.push))
        elif args.command == "push":
            asyncio.run(push(config, args.input or config.output_path))
        elif args.command == "serve":
            serve(config, args.host, args.port)

    except MalformedPayloadError as e:
        logger.error(f"Failed to parse JSON from Browser Use output: {e.reason}")
        logger.error(f"Raw output (first 2000 chars): {e.raw_excerpt}")
        return 1
    except BriefingError as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
