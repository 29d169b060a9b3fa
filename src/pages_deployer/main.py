"""Entry point for the pages-deployer CLI."""

from __future__ import annotations

import sys

from .cli import run_cli
from .errors import DeployerError
from .utils.logging import get_logger

logger = get_logger(__name__)


def app_main() -> None:
    try:
        exit_code = run_cli()
    except (DeployerError, FileNotFoundError) as exc:
        logger.error("%s", exc)
        exit_code = 1
    except KeyboardInterrupt:
        logger.error("Interrupted")
        exit_code = 1
    except Exception as exc:
        logger.exception("Deployment failed: %s", exc)
        exit_code = 1
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    app_main()
