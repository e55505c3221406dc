from __future__ import annotations

from typing import Optional


class DeployError(RuntimeError):
    """Base class for everything this package raises."""


class ConfigError(DeployError):
    """Raised when options or environment values are missing or invalid."""


class ChainConnectionError(DeployError):
    """Raised when a wallet or a client for the chain cannot be set up."""


class DownloadError(DeployError):
    """Raised when contract bytecode cannot be fetched."""

    def __init__(self, url: str, status_code: Optional[int] = None, message: str = "") -> None:
        self.url = url
        self.status_code = status_code
        if not message:
            message = f"Download error: {status_code}" if status_code is not None else "Download error"
        super().__init__(f"{message} ({url})")


class ChainError(DeployError):
    """Raised when the chain or the signing client rejects a transaction."""

    def __init__(
        self,
        message: str,
        *,
        tx_hash: Optional[str] = None,
        code: Optional[int] = None,
        raw_log: Optional[str] = None,
    ) -> None:
        self.tx_hash = tx_hash
        self.code = code
        self.raw_log = raw_log
        super().__init__(message)


class ExecuteError(ChainError):
    """Raised when a contract execute transaction fails."""


class MessageValidationError(DeployError):
    """Raised when a contract message does not match its expected shape."""


class FaucetError(DeployError):
    """Raised when the faucet does not accept a funding request."""

    def __init__(self, url: str, status_code: Optional[int] = None, body: str = "") -> None:
        self.url = url
        self.status_code = status_code
        self.body = body
        head = f"Faucet error: {status_code}" if status_code is not None else "Faucet error"
        super().__init__(f"{head} ({url}) {body}".rstrip())
