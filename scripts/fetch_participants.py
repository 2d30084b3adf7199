#!/usr/bin/env python3
"""Script to list the participants of a weekly challenge as JSON."""

import argparse
import json
import logging
import sys
import os

# Add repository root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from devchallenges.config import Settings
from devchallenges.infrastructure.github_client import GitHubClient
from devchallenges.application.challenge_service import ChallengeService

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    stream=sys.stderr,
)

logger = logging.getLogger(__name__)


def main(argv=None):
    """Fetch participants for a tag and print them to stdout."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("tag", help='Challenge tag, e.g. "#WEEK-042"')
    parser.add_argument(
        "--with-comments",
        action="store_true",
        help="Include the comments posted on each participant's issue",
    )
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env()
        if not settings.github_token:
            logger.warning("GITHUB_TOKEN not found. Using unauthenticated requests (limited rate).")

        service = ChallengeService(GitHubClient(settings))

        result = service.get_participants(args.tag)
        if not result.ok:
            logger.error(f"Could not fetch participants for {args.tag}: {result.error}")
            return 1

        output = []
        for participant in result.data:
            entry = participant.to_dict()
            if args.with_comments:
                comments = service.get_issue_comments(participant.issue_number)
                entry["comments"] = [comment.to_dict() for comment in comments.data]
            output.append(entry)

        json.dump(output, sys.stdout, indent=2, ensure_ascii=False)
        sys.stdout.write("\n")
        logger.info(f"Found {len(output)} participants for {args.tag}")
        return 0

    except Exception as e:
        logger.error(f"Fetching participants failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
