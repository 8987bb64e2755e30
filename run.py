#!/usr/bin/env python3
"""
AutoVault Entry Point

Starts the FastAPI server with the configured host and port.
"""

import sys

import uvicorn

from autovault.api import create_app
from autovault.config import get_config
from autovault.logging_config import setup_logging


def main():
    config = get_config()
    logger = setup_logging(config.log_level, fmt=config.log_format)
    
    logger.info(f"Starting AutoVault on http://{config.api_host}:{config.api_port}")
    logger.info(f"Storage: {config.database_url}")
    logger.info(f"Compounding every {config.compound_interval_ms} ms at {config.base_apy:.2f}% APY")
    
    try:
        uvicorn.run(
            create_app(),
            host=config.api_host,
            port=config.api_port,
            access_log=False
        )
    except KeyboardInterrupt:
        logger.info("Shutting down AutoVault...")
    except Exception as e:
        logger.error(f"Error starting server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
