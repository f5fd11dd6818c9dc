#!/usr/bin/env python3
"""
Similarity computation CLI

Recomputes product similarities for one shop or for every enabled shop,
the same job the cron endpoint runs.
"""

import argparse
import asyncio
import json
import sys

from cart_uplift.core.database import close_database
from cart_uplift.core.logging import get_logger
from cart_uplift.domains.affinity.services import SimilarityComputationService

logger = get_logger(__name__)


async def run(shop_id: str = None) -> int:
    service = SimilarityComputationService()
    try:
        if shop_id:
            result = await service.compute_for_shop(shop_id)
            print(json.dumps(result.model_dump(by_alias=True, mode="json"), indent=2))
            return 1 if result.status.value == "failed" else 0

        summary = await service.compute_for_all_shops()
        print(json.dumps(summary.model_dump(by_alias=True, mode="json"), indent=2))
        return 0 if summary.success else 1
    finally:
        await close_database()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Compute product similarities")
    parser.add_argument("--shop", help="Shop ID to process (default: all enabled shops)")
    args = parser.parse_args(argv)

    try:
        return asyncio.run(run(args.shop))
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
