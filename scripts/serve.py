#!/usr/bin/env python3
"""Script to run the challenge API server."""

import logging
import sys
import os

# Add repository root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import uvicorn

from devchallenges.api.app import app, get_settings

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


def main():
    """Serve the API until interrupted."""
    try:
        settings = get_settings()
        if not settings.github_token:
            logger.warning("GITHUB_TOKEN not found. Discussion routes will return empty results.")

        host = os.getenv("HOST", "0.0.0.0")
        port = int(os.getenv("PORT", "8000"))
        logger.info(f"Serving {settings.full_repo_name} challenge API on {host}:{port}")
        uvicorn.run(app, host=host, port=port, log_level="info")
        return 0
    except Exception as e:
        logger.error(f"Server failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
