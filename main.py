"""
CatDAO Contract Deployer - Main Entry Point
Deploys CatDAOContract and prints its address
"""

import asyncio
import os
import sys
from loguru import logger
from deployer.deploy_engine import Deployer


def configure_logging():
    """Log to stderr and a rotating file; stdout carries only the result"""
    level = os.getenv('LOG_LEVEL', 'INFO').strip().upper()

    try:
        logger.level(level)
        invalid_level = None
    except ValueError:
        invalid_level, level = level, 'INFO'

    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level=level
    )
    logger.add(
        "data/logs/deploy.log",
        rotation="1 day",
        retention="7 days",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
        level="DEBUG"
    )

    if invalid_level is not None:
        logger.warning(f"Unknown LOG_LEVEL {invalid_level!r}, using INFO")


def main():
    """Main entry point"""
    configure_logging()

    exit_code = asyncio.run(Deployer().run())

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
