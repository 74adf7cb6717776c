import argparse
import logging
import os
import sys
from collections.abc import Sequence

from editorial.adapters.clock import SystemClock
from editorial.adapters.sqlite import SQLiteMigrator, SQLiteUnitOfWork
from editorial.api.deps import Settings
from editorial.components.posts import PostComponent
from editorial.domain.errors import EngineError
from editorial.rules.loader import load_rules_or_default

logger = logging.getLogger("cli")


def handle_migrate(settings: Settings, args: argparse.Namespace) -> int:
    applied = SQLiteMigrator(settings.db_path).run_migrations()
    print(f"Applied {len(applied)} migrations.")
    return 0


def handle_publish_due(settings: Settings, args: argparse.Namespace) -> int:
    """One pass of the scheduled-publication sweep; run it from cron or a timer."""
    rules = load_rules_or_default(settings.rules_path)
    posts = PostComponent(SQLiteUnitOfWork(settings.db_path), SystemClock(), rules)
    try:
        result = posts.publish_due()
    except EngineError as e:
        logger.error("Sweep failed: %s", e)
        return 1

    print(f"Published {result.count} posts.")
    for err in result.errors:
        print(f"  {err.post_id}: {err.code} {err.message}", file=sys.stderr)
    return 0 if result.success else 2


def handle_serve(settings: Settings, args: argparse.Namespace) -> int:
    import uvicorn

    # The app builds its own Settings from the environment
    os.environ["EDITORIAL_DATA_DIR"] = str(settings.data_dir)
    os.environ["EDITORIAL_RULES_PATH"] = str(settings.rules_path)
    uvicorn.run("editorial.api.main:app", host=args.host, port=args.port)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Editorial engine CLI")
    parser.add_argument("--data-dir", help="Directory holding the database and media")
    parser.add_argument("--rules", help="Path to rules.yaml")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # migrate
    subparsers.add_parser("migrate", help="Apply pending database migrations")

    # publish-due
    subparsers.add_parser("publish-due", help="Publish scheduled posts whose time has passed")

    # serve
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    settings = Settings(data_dir=args.data_dir, rules_path=args.rules)

    if args.command == "migrate":
        return handle_migrate(settings, args)
    if args.command == "publish-due":
        return handle_publish_due(settings, args)
    return handle_serve(settings, args)


if __name__ == "__main__":
    sys.exit(main())
