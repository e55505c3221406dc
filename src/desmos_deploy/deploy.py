from __future__ import annotations

import asyncio
import base64
import logging
from dataclasses import dataclass
from typing import Any, Mapping, NamedTuple, Optional, Union

import aiohttp
from terra_sdk.client.lcd import LCDClient, Wallet
from terra_sdk.client.lcd.api.tx import CreateTxOptions
from terra_sdk.core import Coins
from terra_sdk.core.bank import MsgSend
from terra_sdk.core.wasm import MsgExecuteContract, MsgInstantiateContract, MsgStoreCode
from terra_sdk.exceptions import LCDResponseError
from terra_sdk.util.contract import get_code_id, get_contract_address

from .errors import ChainConnectionError, ChainError, ExecuteError
from .options import Options, StdFee, build_fee_table, resolve_options
from .wallet import build_wallet_key

logger = logging.getLogger(__name__)

TRANSPORT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, OSError)


@dataclass(frozen=True)
class CodeMeta:
    source: str = ""
    builder: str = ""

    def memo(self) -> str:
        if not self.source and not self.builder:
            return ""
        return f"source={self.source} builder={self.builder}"


class Deployer:
    """
    Signing client bound to one wallet and one fee table.

    Every state-changing call is signed with the fixed fee for its kind and
    broadcast exactly once. A rejection raises ChainError and is never
    retried.
    """

    def __init__(self, client: LCDClient, wallet: Wallet, fee_table: Mapping[str, StdFee], address: str):
        self.client = client
        self.wallet = wallet
        self.fee_table = fee_table
        self._address = address

    @property
    def address(self) -> str:
        return self._address

    def send_msg(self, msg, fee_kind: str, memo: Optional[str] = None, error_cls=ChainError):
        fee = self.fee_table[fee_kind].to_fee()
        try:
            tx = self.wallet.create_and_sign_tx(CreateTxOptions(msgs=[msg], fee=fee, memo=memo or ""))
            result = self.client.tx.broadcast(tx)
        except LCDResponseError as e:
            raise error_cls(f"{fee_kind} transaction rejected: {e}") from e
        except TRANSPORT_ERRORS as e:
            raise error_cls(f"{fee_kind} transaction not delivered: {e!r}") from e

        code = getattr(result, "code", None)
        if code:
            raise error_cls(
                f"{fee_kind} transaction failed with code {code}: {result.raw_log}",
                tx_hash=result.txhash,
                code=code,
                raw_log=result.raw_log,
            )
        return result

    def store_code(self, wasm: bytes, meta: Optional[CodeMeta] = None, memo: Optional[str] = None) -> int:
        msg = MsgStoreCode(
            sender=self.address,
            wasm_byte_code=base64.b64encode(wasm).decode(),
            instantiate_permission=None,
        )
        if memo is None and meta is not None:
            memo = meta.memo()
        result = self.send_msg(msg, "upload", memo)
        try:
            code_id = int(get_code_id(result))
        except (KeyError, IndexError, ValueError) as e:
            raise ChainError("No code_id in upload result", tx_hash=result.txhash, raw_log=result.raw_log) from e
        logger.info("Stored %d bytes as code %d (tx %s)", len(wasm), code_id, result.txhash)
        return code_id

    def instantiate_contract(
        self,
        code_id: int,
        init_msg: Mapping[str, Any],
        label: str,
        admin: Optional[str] = None,
        memo: Optional[str] = None,
    ) -> str:
        msg = MsgInstantiateContract(
            sender=self.address,
            admin=admin,
            code_id=code_id,
            label=label,
            msg=dict(init_msg),
        )
        result = self.send_msg(msg, "init", memo)
        try:
            contract_address = get_contract_address(result)
        except (KeyError, IndexError) as e:
            raise ChainError("No contract address in instantiate result", tx_hash=result.txhash, raw_log=result.raw_log) from e
        logger.info("Instantiated code %d as %s (%s)", code_id, contract_address, label)
        return contract_address

    def execute_contract(
        self,
        contract_addr: str,
        execute_msg: Mapping[str, Any],
        coins: Union[Coins, str, None] = None,
        memo: Optional[str] = None,
    ):
        msg = MsgExecuteContract(
            sender=self.address,
            contract=contract_addr,
            msg=dict(execute_msg),
            coins=Coins(coins) if coins else Coins(),
        )
        result = self.send_msg(msg, "exec", memo, error_cls=ExecuteError)
        logger.info("Executed %s on %s (tx %s)", next(iter(execute_msg), "?"), contract_addr, result.txhash)
        return result

    def query_contract(self, contract_addr: str, query_msg: Mapping[str, Any]) -> Any:
        logger.debug("Querying %s with %s", contract_addr, query_msg)
        try:
            return self.client.wasm.contract_query(contract_addr, dict(query_msg))
        except LCDResponseError as e:
            raise ChainError(f"Query on {contract_addr} failed: {e}") from e
        except TRANSPORT_ERRORS as e:
            raise ChainError(f"Query on {contract_addr} not delivered: {e!r}") from e

    def send_tokens(self, recipient: str, amount: int, denom: Optional[str] = None, memo: Optional[str] = None):
        denom = denom or self.fee_table["send"].denom
        msg = MsgSend(
            from_address=self.address,
            to_address=recipient,
            amount=Coins({denom: int(amount)}),
        )
        result = self.send_msg(msg, "send", memo)
        logger.info("Sent %d%s to %s (tx %s)", int(amount), denom, recipient, result.txhash)
        return result


class Connection(NamedTuple):
    client: Deployer
    address: str


def connect(
    mnemonic: str,
    overrides: Optional[Mapping[str, Any]] = None,
    *,
    options: Optional[Options] = None,
    check_endpoint: bool = True,
) -> Connection:
    """
    Derive the wallet for ``mnemonic`` and bind a signing client to it.

    ``overrides`` is applied field by field on top of ``options`` (or the
    defaults). With ``check_endpoint`` the node is asked for its info once
    and an unreachable ``http_url`` raises ChainConnectionError. Nothing is
    retried.
    """
    opts = resolve_options(overrides, options)
    fee_table = build_fee_table(opts.fee_token, opts.gas_price)
    key = build_wallet_key(mnemonic, opts.bech32_prefix, opts.coin_type)
    address = key.acc_address

    client = LCDClient(url=opts.http_url, chain_id=opts.network_id)
    if check_endpoint:
        try:
            client.tendermint.node_info()
        except (LCDResponseError,) + TRANSPORT_ERRORS as e:
            raise ChainConnectionError(f"Cannot reach {opts.http_url}: {e}") from e

    wallet = client.wallet(key)
    logger.info("Connected %s to %s (%s)", address, opts.http_url, opts.network_id)
    return Connection(client=Deployer(client, wallet, fee_table, address), address=address)
