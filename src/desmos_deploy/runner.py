from __future__ import annotations

import logging
import os
import sys
from typing import Callable, Mapping, NoReturn, Optional

from .errors import ConfigError, DeployError
from .log import setup_logging

logger = logging.getLogger(__name__)

MNEMONIC_ENV = "DESMOS_MNEMONIC"


def require_mnemonic(environ: Optional[Mapping[str, str]] = None, var: str = MNEMONIC_ENV) -> str:
    env = os.environ if environ is None else environ
    value = (env.get(var) or "").strip()
    if not value:
        raise ConfigError(f"Missing required environment variable: {var}")
    return value


def run(main: Callable[[], object], *, level: int = logging.INFO) -> NoReturn:
    """Run a script body: exit 0 when it returns, 1 after logging any error."""
    setup_logging(level)
    try:
        main()
    except DeployError as e:
        logger.error("%s: %s", type(e).__name__, e)
        sys.exit(1)
    except Exception:
        logger.exception("Unexpected failure")
        sys.exit(1)
    sys.exit(0)
