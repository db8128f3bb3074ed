#!/usr/bin/env python
"""
Entry point for the Altibox -> Visma invoice mailer
"""
import logging
import os

from dotenv import load_dotenv
from altibox_expense.config import Config
from altibox_expense.expense_automation import ExpenseAutomation


def main() -> int:
    # This will read .env into os.environment
    load_dotenv()

    logging.basicConfig(
        level=os.getenv('LOG_LEVEL', 'DEBUG').upper(),
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s'
    )

    logger = logging.getLogger(__name__)
    logger.info("Starting Visma auto expense...")

    # Load configuration and validate environment variables
    cfg = Config.from_env()
    logger.debug("Configuration loaded: %s", cfg)

    os.makedirs(cfg.download_dir, exist_ok=True)

    outcome = ExpenseAutomation(cfg).run()
    logger.debug("Run outcome: %s", outcome)
    logger.info("Automation completed")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
