#!/usr/bin/env python3
"""
Launch the document classification API with uvicorn.
"""

import sys
import argparse
from pathlib import Path

# Add the parent directory to sys.path to import our modules
sys.path.insert(0, str(Path(__file__).parent.parent))

import uvicorn

from docclass.core.config import HOST, PORT, SERVER_NAME, debug_enabled, validate_config


def main():
    parser = argparse.ArgumentParser(description=f'Run the {SERVER_NAME}')
    parser.add_argument('--host', default=HOST,
                        help=f'Host to bind to (default: {HOST})')
    parser.add_argument('--port', type=int, default=PORT,
                        help=f'Port to serve on (default: {PORT})')
    parser.add_argument('--reload', action='store_true',
                        help='Reload on code changes (development only)')

    args = parser.parse_args()

    issues = validate_config()
    if issues:
        print("❌ Invalid configuration:")
        for issue in issues:
            print(f"  - {issue}")
        sys.exit(1)

    print(f"🚀 {SERVER_NAME}")
    print(f"📡 Server running on http://{args.host}:{args.port}")
    print(f"🏥 Health check: http://{args.host}:{args.port}/health")

    uvicorn.run(
        "docclass.api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="debug" if debug_enabled() else "info",
    )


if __name__ == "__main__":
    main()
