#!/usr/bin/env python3
"""
API entrypoint - serves the media catalog over HTTP with uvicorn.
"""

import sys
from pathlib import Path

# Load environment variables from .env file first
import dotenv
dotenv.load_dotenv()

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import uvicorn


def main():
    from mediashelf.core.config import API_HOST, API_PORT, get_db_path, debug_enabled

    print(f"🚀 Starting MediaShelf API on http://{API_HOST}:{API_PORT}")
    print(f"   Database: {get_db_path()}")
    if debug_enabled():
        print(f"   Docs: http://{API_HOST}:{API_PORT}/docs")

    uvicorn.run("mediashelf.api.main:app", host=API_HOST, port=API_PORT, reload=debug_enabled())
    return 0


if __name__ == "__main__":
    sys.exit(main())
