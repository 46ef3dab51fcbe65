#!/usr/bin/env python3
"""Run the K-9 Smart Fetch API with uvicorn.

Usage:
    python scripts/serve.py                  # 127.0.0.1:8000
    python scripts/serve.py --port 9000 --reload

The database path comes from K9_DB_PATH; missing tables are created
before the server starts.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

import uvicorn

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from k9fetch.db.session import init_db, resolve_db_path  # noqa: E402


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the K-9 Smart Fetch API")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--reload", action="store_true", help="Reload on source changes")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    level = os.environ.get("K9_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    init_db()
    logging.getLogger("k9fetch").info(f"Using database {resolve_db_path()}")

    uvicorn.run(
        "k9fetch.api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        reload_dirs=[str(PROJECT_ROOT / "src")] if args.reload else None,
        log_level=level.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
