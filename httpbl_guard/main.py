"""Main entry point for httpbl-guard."""

import logging
import sys

from dotenv import load_dotenv

from httpbl_guard.app import create_app
from httpbl_guard.config import Config
from httpbl_guard.services.logger import setup_logging
from httpbl_guard.services.reputation import ReputationService
from httpbl_guard.services.resolver import DnsResolver


logger = logging.getLogger(__name__)


def main() -> int:
    """Load configuration and serve the check endpoint.

    Returns:
        int: Exit code (0 for clean shutdown, 1 for fatal error).
    """
    load_dotenv()
    setup_logging()
    logger.info("Starting httpbl-guard")

    try:
        config = Config.from_env()
        setup_logging(verbose=config.verbose)
        logger.info(f"Configuration loaded: {config}")

        resolver = DnsResolver(
            timeout=config.dns_timeout, nameservers=config.dns_nameservers
        )
        service = ReputationService(config.access_key, resolver, config.policy())
        logger.info("http:BL resolver initialized")

        app = create_app(config, service)
        logger.info(f"Starting http:BL server on {config.bind_address}")
        app.run(host=config.host, port=config.port, threaded=True)
        return 0

    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
