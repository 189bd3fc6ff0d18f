#!/usr/bin/env python3
"""Run the skill market API server.

Usage:
    python scripts/run_api.py [--host HOST] [--port PORT] [--reload]

Environment:
    SKILLMARKET_ADMIN - Required. Administrator identity.
    DATABASE_URL - Optional. SQLAlchemy URL; the ledger runs in memory without it.

Examples:
    python scripts/run_api.py
    python scripts/run_api.py --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

import uvicorn

# Ensure imports work when invoked as a script
_REPO_ROOT = Path(__file__).resolve().parents[1]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))


def main() -> int:
    """Run the API server."""
    parser = argparse.ArgumentParser(description="Run the skill market FastAPI server.")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to (default: 8000)")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")
    args = parser.parse_args()

    if not os.environ.get("SKILLMARKET_ADMIN"):
        print("Error: SKILLMARKET_ADMIN environment variable is required", file=sys.stderr)
        return 1

    if not os.environ.get("DATABASE_URL"):
        print("Warning: DATABASE_URL not set, ledger state will not survive a restart", file=sys.stderr)

    print(f"Starting skill market API on {args.host}:{args.port}")
    print(f"  - GET http://{args.host}:{args.port}/health")
    print(f"  - GET http://{args.host}:{args.port}/config")
    print()

    uvicorn.run(
        "api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="info",
    )

    return 0


if __name__ == "__main__":
    sys.exit(main())
