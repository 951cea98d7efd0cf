"""
Apartment Treasury Backend — Uvicorn Launcher
Run this file to start the development server.

Usage:
    python run.py
    python run.py --port 8000
    python run.py --reload
"""
import argparse
import uvicorn

from treasury.config import Settings, get_settings


def worker_warnings(settings: Settings, workers: int) -> list[str]:
    """Settings that break when requests are spread over several worker processes."""
    if workers <= 1:
        return []
    warnings = []
    if settings.STORAGE_BACKEND != "sql":
        warnings.append("More than one worker needs STORAGE_BACKEND=sql (each worker keeps its own in-memory store)")
    if not settings.SECRET_KEY:
        warnings.append("More than one worker needs SECRET_KEY set (tokens from one worker fail on the others)")
    return warnings


def main():
    parser = argparse.ArgumentParser(description="Apartment Treasury Backend Server")
    parser.add_argument("--host", default="0.0.0.0", help="Bind host (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")
    parser.add_argument("--reload", action="store_true", help="Enable hot reload for development")
    parser.add_argument("--workers", type=int, default=1, help="Number of workers (default: 1)")

    args = parser.parse_args()

    for warning in worker_warnings(get_settings(), args.workers):
        print(f"  [!] {warning}")

    print(f"""
    ========================================================
      Apartment Treasury -- Backend Server
      API:     http://{args.host}:{args.port}/api
      Docs:    http://localhost:{args.port}/docs
      ReDoc:   http://localhost:{args.port}/redoc
      Uploads: http://localhost:{args.port}/uploads/
    ========================================================
    """)

    uvicorn.run(
        "treasury.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=args.workers,
        log_level="info",
    )


if __name__ == "__main__":
    main()
