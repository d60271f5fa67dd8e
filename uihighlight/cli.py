"""Command line entry point for the UI highlight generator."""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
from typing import Optional, Sequence

from .core.batch import BatchOrchestrator
from .core.config import config
from .core.exceptions import BatchNotReadyError
from .core.logger import log
from .core.status import StatusMessage
from .utils.file_utils import (
    LAYOUT_DUMP_SUFFIXES,
    SCREENSHOT_SUFFIXES,
    collect_files,
    save_annotated_images,
    save_bytes,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="uihighlight",
        description="Highlight leaf UI elements from layout dumps on their screenshots",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Annotate every screenshot/dump pair in a directory")
    generate.add_argument("input_dir", help="Directory containing screenshots (and dumps unless --xml-dir is set)")
    generate.add_argument("--xml-dir", help="Directory containing the layout dump XML files")
    generate.add_argument("--output-dir", "-o", default=config.output_dir,
                          help=f"Output directory (default: {config.output_dir})")
    generate.add_argument("--zip", action="store_true", help="Write a single highlights.zip instead of PNG files")

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=config.api_host, help="Host to bind to")
    serve.add_argument("--port", type=int, default=config.api_port, help="Port to bind to")
    serve.add_argument("--debug", action="store_true", help="Enable debug mode")

    return parser


def generate_command(args: argparse.Namespace) -> int:
    """Run one batch over the files on disk; returns the process exit code."""
    for directory in filter(None, (args.input_dir, args.xml_dir)):
        if not os.path.isdir(directory):
            log.error(f"Directory not found: {directory}")
            return 1

    layout_dumps = collect_files(args.xml_dir or args.input_dir, LAYOUT_DUMP_SUFFIXES)
    screenshots = collect_files(args.input_dir, SCREENSHOT_SUFFIXES)

    orchestrator = BatchOrchestrator()
    status = orchestrator.update_uploads(layout_dumps, screenshots)
    log.info(status.text)

    try:
        report = asyncio.run(orchestrator.run())
    except BatchNotReadyError:
        return 1

    if report.status is not StatusMessage.DONE:
        log.error(report.status.text)
        for name, reason in report.failed.items():
            log.error(f"  {name}: {reason}")
        return 1

    if args.zip:
        path = save_bytes(orchestrator.export_archive(), os.path.join(args.output_dir, "highlights.zip"))
        log.success(f"Archive written to {path}")
    else:
        paths = save_annotated_images(orchestrator.completed_images(), args.output_dir)
        log.success(f"{len(paths)} highlight image(s) written to {args.output_dir}")
    return 0


def serve_command(args: argparse.Namespace) -> int:
    import uvicorn

    from .api.app import create_app

    log.info(f"Starting UI Highlight API on {args.host}:{args.port}")
    uvicorn.run(
        create_app(),
        host=args.host,
        port=args.port,
        log_level="debug" if args.debug else "info"
    )
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config.validate_config()

    if args.command == "generate":
        return generate_command(args)
    return serve_command(args)


if __name__ == "__main__":
    sys.exit(main())
