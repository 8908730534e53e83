import asyncio
import sys
import logging

from github_stats.application.collector_service import CollectorService
from github_stats.config import CollectorConfig
from github_stats.domain.exceptions import ConfigurationError
from github_stats.infrastructure.accumulators import LineProtocolAccumulator

logger = logging.getLogger(__name__)


def configure_logging(debug: bool) -> None:
    # Metrics go to stdout, so logs go to stderr
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )

async def main() -> int:
    # Load the configuration from the environment (and a .env file, if any)
    try:
        config = CollectorConfig.from_env()
    except ConfigurationError as e:
        configure_logging(debug=False)
        logger.error(str(e))
        return 1

    configure_logging(config.debug)

    accumulator = LineProtocolAccumulator()
    collector_service = CollectorService(config=config, accumulator=accumulator)

    try:
        await collector_service.gather()
    except ConfigurationError as e:
        logger.error(f"{e} Set GITHUB_REPOS to a comma separated list of 'owner/name' identifiers.")
        return 1

    if accumulator.errors:
        logger.warning(f"{len(accumulator.errors)} of {len(config.repos)} repositories failed.")
        return 1
    return 0

def run() -> None:
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Collection interrupted by user. Exiting gracefully.")

if __name__ == "__main__":
    run()
