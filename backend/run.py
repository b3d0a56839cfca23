"""Run the API server: python -m backend.run [--reload]."""
import argparse

import uvicorn

from backend.app.core.config import settings

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Serve the video scrape API")
    parser.add_argument("--host", default=settings.host)
    parser.add_argument("--port", type=int, default=settings.port)
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    args = parser.parse_args()

    print(f"Starting server on {args.host}:{args.port}...")
    uvicorn.run(
        "backend.app.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )
