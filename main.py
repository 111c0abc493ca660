"""
Entry point for the admin import client.
"""

import argparse
import sys

from services.gemini_client import GeminiClient, TranscriptBlogWriter
from src.config import DEFAULT_CONFIG_FILE, load_config
from src.converters.video_to_post import VideoConverter
from src.importers.orchestrator import ImportOrchestrator
from src.mutators.bulk import BulkMutator, Selection
from src.utils.logs import log_message
from src.utils.pre_flight_checks import PreFlightCheckError, run_admin_pre_flight_checks


def render_job(job):
    """Print the latest log line of a job snapshot with its progress."""
    if job.logs:
        print(f"  [{job.progress:5.1f}%] {job.logs[-1]}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Outdoor site admin console: imports and bulk edits")
    parser.add_argument("--config", default=DEFAULT_CONFIG_FILE, help=f"Config JSON (default: {DEFAULT_CONFIG_FILE})")
    sub = parser.add_subparsers(dest="command", required=True)

    wp = sub.add_parser("import-wordpress", help="Import posts from the configured WordPress site")
    wp.add_argument("--limit", type=int, default=None)
    wp.add_argument("--category", default=None, help="Blog category id for imported posts")
    wp.add_argument("--skip-checks", action="store_true")

    yt = sub.add_parser("import-youtube", help="Import new videos from a channel and fetch their transcripts")
    yt.add_argument("channel_id")
    yt.add_argument("--limit", type=int, default=None)
    yt.add_argument("--category", default=None)
    yt.add_argument("--skip-checks", action="store_true")

    for name, help_text in (
        ("bulk-category", "Move selected items to a category"),
        ("bulk-status", "Change the status of selected blog posts"),
        ("bulk-delete", "Delete selected items"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("ids", nargs="+")
        p.add_argument("--type", dest="item_type", choices=["blog", "youtube"], default="blog")
        if name == "bulk-category":
            p.add_argument("--category", required=True)
        if name == "bulk-status":
            p.add_argument("--status", required=True, choices=["draft", "published"])

    conv = sub.add_parser("convert", help="Ask the backend to turn a video into a blog post")
    conv.add_argument("video_id")
    conv.add_argument("--category", required=True)
    conv.add_argument("--title", default=None)
    conv.add_argument("--no-summary", action="store_true")
    conv.add_argument("--no-tags", action="store_true")

    local = sub.add_parser("convert-local", help="Generate the blog post here with Gemini and create it")
    local.add_argument("video_id")
    local.add_argument("--category", type=int, default=None)
    local.add_argument("--title", default=None)
    local.add_argument("--no-summary", action="store_true")
    local.add_argument("--no-tags", action="store_true")
    return parser


def run_import(config, args) -> int:
    source = "wordpress" if args.command == "import-wordpress" else "youtube"
    if not args.skip_checks:
        try:
            run_admin_pre_flight_checks(config, source=source)
        except PreFlightCheckError as e:
            log_message(str(e), level="ERROR")
            return 1

    orchestrator = ImportOrchestrator(config)
    orchestrator.tracker.subscribe(render_job)
    try:
        if source == "wordpress":
            orchestrator.import_wordpress(limit=args.limit, category_id=args.category)
        else:
            orchestrator.import_youtube(args.channel_id, limit=args.limit, category_id=args.category)
        status = 0
    except Exception as e:
        log_message(f"Import aborted: {e}", level="ERROR")
        status = 1
    job = orchestrator.wait_until_closable()
    log_message(f"{job.current_step} ({job.imported_count} imported, {job.skipped_count} skipped)")
    orchestrator.close()
    return status


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config(config_file=args.config)

    if args.command in ("import-wordpress", "import-youtube"):
        return run_import(config, args)

    try:
        if args.command.startswith("bulk-"):
            mutator = BulkMutator(config, args.item_type, selection=Selection(args.ids))
            if args.command == "bulk-category":
                mutator.change_category(args.category)
            elif args.command == "bulk-status":
                mutator.change_status(args.status)
            else:
                mutator.delete()
        elif args.command == "convert":
            VideoConverter(config).convert(
                args.video_id,
                category_id=args.category,
                title=args.title,
                summary=not args.no_summary,
                tags=not args.no_tags,
            )
        elif args.command == "convert-local":
            gemini = config["gemini"]
            writer = TranscriptBlogWriter(GeminiClient(api_key=gemini["api_key"] or None, model=gemini["model"]))
            VideoConverter(config, writer=writer).convert_locally(
                args.video_id,
                category_id=args.category,
                title=args.title,
                summary=not args.no_summary,
                tags=not args.no_tags,
            )
    except Exception as e:
        log_message(f"{args.command} failed: {e}", level="ERROR")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
