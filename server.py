#!/usr/bin/env python3
"""Site content server. Port and admin key configurable via PORT and ADMIN_KEY in .env."""

import logging

from sitecms.app import create_app
from sitecms.config import load_config

logger = logging.getLogger("sitecms.server")


def main():
    config = load_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app(config)
    logger.info("Server running on http://localhost:%s", config.port)
    logger.info("Admin key: %s", "(default - CHANGE THIS!)" if config.uses_default_admin_key else "(from .env)")
    app.run(host=config.host, port=config.port, debug=False)


if __name__ == "__main__":
    main()
