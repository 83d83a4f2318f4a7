"""
fsinspect Package Main Entry Point

This module serves as the main entry point when the package is run as a module
using `python -m fsinspect`. It delegates to the Typer application.
"""

import logging
import sys

from fsinspect.cli.common.error_handler import handle_cli_error
from fsinspect.cli.typer_app import app
from fsinspect.shared.constants import CLIDefaults

logger = logging.getLogger(__name__)


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        logger.info("Command interrupted by user")
        sys.exit(CLIDefaults.EXIT_INTERRUPTED)
    except SystemExit:
        raise
    except Exception as e:  # noqa: BLE001
        exit_code = handle_cli_error(e, "fsinspect-main")
        sys.exit(exit_code)
