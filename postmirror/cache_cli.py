# postmirror/cache_cli.py

from __future__ import annotations

import argparse
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from postmirror.core.attachments import RealAttachmentsContext
from postmirror.core.fetch import AttachmentCacheError
from postmirror.schemas.models import (
    AttachmentResource,
    AvatarResource,
    CachePolicy,
    HeaderResource,
    StaticResource,
)


def _configure_logging(verbose: bool, log_file: str | None) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
        handler.setFormatter(logging.Formatter(fmt="%(asctime)s %(levelname)s %(name)s %(message)s", datefmt="(%Y-%m-%d %H:%M:%S)"))
        logging.getLogger().addHandler(handler)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Fetch a resource into the attachment cache and print its local path.")

    what = p.add_mutually_exclusive_group(required=True)
    what.add_argument("--store", type=str, default=None, help="Local file to copy into the cache")
    what.add_argument("--attachment", type=str, default=None, help="Platform attachment id")
    what.add_argument("--thumb", type=str, default=None, help="Platform attachment id (thumbnail variant)")
    what.add_argument("--imported", type=str, default=None, help="External URL (requires --context)")
    what.add_argument("--static", type=str, default=None, help="Static asset URL (requires --filename)")
    what.add_argument("--avatar", type=str, default=None, help="Avatar URL (requires --filename)")
    what.add_argument("--header", type=str, default=None, help="Header image URL (requires --filename)")

    p.add_argument("--context", type=str, default=None, help="Post base name an imported URL belongs to")
    p.add_argument("--filename", type=str, default=None, help="Destination filename for static/avatar/header assets")
    p.add_argument("--root", type=str, default="attachments", help="Storage root directory")
    p.add_argument("--offline", type=int, choices=(0, 1), default=0, help="Fail on cache miss instead of downloading")
    p.add_argument("--timeout", type=float, default=None)
    p.add_argument("--ua", type=str, default=None)
    p.add_argument("--thumb-width", type=int, default=675)
    p.add_argument("--verbose", action="store_true")
    p.add_argument("--log-file", type=str, default=None)
    return p


def main(argv: list[str] | None = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)

    selected = (args.store, args.attachment, args.thumb, args.imported, args.static, args.avatar, args.header)
    if "" in selected:
        p.error("resource argument must not be empty")
    if args.imported is not None and not args.context:
        p.error("--imported requires --context")
    if (args.static, args.avatar, args.header) != (None, None, None) and not args.filename:
        p.error("--static/--avatar/--header require --filename")

    _configure_logging(args.verbose, args.log_file)

    policy = CachePolicy(
        storage_root=Path(args.root),
        thumbnail_width=args.thumb_width,
        timeout_s=args.timeout,
        user_agent=args.ua,
        allow_network=not bool(args.offline),
    )
    ctx = RealAttachmentsContext(policy)

    try:
        if args.store is not None:
            path = ctx.store(Path(args.store))
        elif args.attachment is not None:
            path = ctx.cache_resource(AttachmentResource(id=args.attachment))
        elif args.thumb is not None:
            path = ctx.cache_thumb(args.thumb)
        elif args.imported is not None:
            path = ctx.cache_imported(args.imported, args.context)
        elif args.static is not None:
            path = ctx.cache_resource(StaticResource(filename=args.filename, url=args.static))
        elif args.avatar is not None:
            path = ctx.cache_resource(AvatarResource(filename=args.filename, url=args.avatar))
        else:
            path = ctx.cache_resource(HeaderResource(filename=args.filename, url=args.header))
    except AttachmentCacheError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(str(path))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
