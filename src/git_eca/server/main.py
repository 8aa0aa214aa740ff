"""
Main entry point for the Git ECA server.

Runs the FastAPI server using uvicorn.
"""

import argparse
import logging
import os

import uvicorn

from ..config import CONFIG_PATH_ENV, ConfigManager


def main():
    """Main entry point for the Git ECA server."""
    parser = argparse.ArgumentParser(description="Git ECA Validation Server")
    parser.add_argument("--config", type=str, help="Path to the JSON config file")
    parser.add_argument("--port", type=int, help="Port to run server on")
    parser.add_argument("--host", type=str, help="Host to bind server to")
    parser.add_argument(
        "--reload", action="store_true", help="Enable auto-reload for development"
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s %(levelname)s:%(name)s:%(message)s"
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)

    if args.config:
        # The app factory reads the path back from the environment
        os.environ[CONFIG_PATH_ENV] = args.config
    config = ConfigManager().get_config()
    host = args.host or config.server.host
    port = args.port or config.server.port

    print(f"Starting Git ECA Server on {host}:{port}")
    print(f"Documentation available at: http://{host}:{port}/docs")

    uvicorn.run(
        "git_eca.server.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=args.reload,
        access_log=True,
    )


if __name__ == "__main__":
    main()
