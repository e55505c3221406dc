from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, NamedTuple, Optional

import requests

from ..deploy import CodeMeta, Deployer
from ..errors import DownloadError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60


def download_wasm(url: str, *, session: Optional[requests.Session] = None, timeout: float = DEFAULT_TIMEOUT) -> bytes:
    http = session or requests
    try:
        r = http.get(url, timeout=timeout)
    except requests.RequestException as e:
        raise DownloadError(url, message=f"Download error: {e}") from e
    if r.status_code != 200:
        raise DownloadError(url, r.status_code)
    logger.info("Downloaded %d bytes from %s", len(r.content), url)
    return r.content


def load_wasm(source: str, *, session: Optional[requests.Session] = None) -> bytes:
    """Read contract bytecode from an http(s) URL or a local file."""
    if source.startswith(("http://", "https://")):
        return download_wasm(source, session=session)
    path = Path(source)
    try:
        return path.read_bytes()
    except OSError as e:
        raise DownloadError(source, message=f"Cannot read {path}: {e}") from e


class Deployment(NamedTuple):
    code_id: int
    contract_address: str


def deploy_contract(
    client: Deployer,
    source: str,
    init_msg: Mapping[str, Any],
    label: str,
    *,
    admin: Optional[str] = None,
    meta: Optional[CodeMeta] = None,
    session: Optional[requests.Session] = None,
) -> Deployment:
    """Upload ``source`` and instantiate it once."""
    code_id = client.store_code(load_wasm(source, session=session), meta)
    contract_address = client.instantiate_contract(code_id, init_msg, label, admin=admin, memo=f"Init {label}")
    return Deployment(code_id, contract_address)
