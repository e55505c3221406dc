from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from .errors import FaucetError

logger = logging.getLogger(__name__)


def hit_faucet(
    faucet_url: str,
    address: str,
    denom: str,
    *,
    session: Optional[requests.Session] = None,
    timeout: float = 60,
) -> Any:
    """Ask a faucet to fund ``address`` with ``denom``; returns the decoded reply."""
    http = session or requests
    try:
        r = http.post(faucet_url, json={"denom": denom, "address": address}, timeout=timeout)
    except requests.RequestException as e:
        raise FaucetError(faucet_url, None, str(e)) from e

    logger.info("Faucet %s answered %d", faucet_url, r.status_code)
    if not 200 <= r.status_code < 300:
        raise FaucetError(faucet_url, r.status_code, r.text)
    try:
        body = r.json()
    except ValueError:
        body = r.text
    logger.info("Faucet reply: %s", body)
    return body
