from __future__ import annotations

import dataclasses
import math
import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Any, Mapping, Optional

from terra_sdk.core import Coin, Coins
from terra_sdk.core.fee import Fee

from .errors import ConfigError

DESMOS_COIN_TYPE = 852

# gas units per operation kind
UPLOAD_GAS = 1_500_000
INIT_GAS = 500_000
MIGRATE_GAS = 500_000
EXEC_GAS = 200_000
SEND_GAS = 80_000
CHANGE_ADMIN_GAS = 80_000

FEE_KINDS = ("upload", "init", "migrate", "exec", "send", "change_admin")


@dataclass(frozen=True)
class Options:
    http_url: str = "https://lcd.desmos.com"
    network_id: str = "morpheus"
    fee_token: str = "udaric"
    gas_price: float = 0.01
    bech32_prefix: str = "desmos"
    coin_type: int = DESMOS_COIN_TYPE

    def merged(self, overrides: Optional[Mapping[str, Any]] = None) -> "Options":
        """Return a copy with every non-None value of ``overrides`` applied."""
        if not overrides:
            return self
        known = {f.name for f in dataclasses.fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ConfigError(f"Unknown option(s): {', '.join(unknown)}")
        changes = {k: v for k, v in overrides.items() if v is not None}
        return dataclasses.replace(self, **changes)


DEFAULT_OPTIONS = Options()

_ENV_FIELDS = {
    "DESMOS_LCD_URL": ("http_url", str),
    "DESMOS_CHAIN_ID": ("network_id", str),
    "DESMOS_FEE_TOKEN": ("fee_token", str),
    "DESMOS_GAS_PRICE": ("gas_price", float),
    "DESMOS_PREFIX": ("bech32_prefix", str),
    "DESMOS_COIN_TYPE": ("coin_type", int),
}


def resolve_options(
    overrides: Optional[Mapping[str, Any]] = None, base: Optional[Options] = None
) -> Options:
    return (base or DEFAULT_OPTIONS).merged(overrides)


def options_from_env(
    environ: Optional[Mapping[str, str]] = None, base: Optional[Options] = None
) -> Options:
    """
    Build Options from DESMOS_* environment variables on top of ``base``.

    Empty variables are ignored. Raises ConfigError for values that do not
    parse as the field's type.
    """
    env = os.environ if environ is None else environ
    overrides: dict[str, Any] = {}
    for var, (field, cast) in _ENV_FIELDS.items():
        raw = (env.get(var) or "").strip()
        if not raw:
            continue
        try:
            overrides[field] = cast(raw)
        except ValueError as e:
            raise ConfigError(f"Invalid value for {var}: {raw!r}") from e
    return resolve_options(overrides, base)


@dataclass(frozen=True)
class StdFee:
    gas: int
    amount: int
    denom: str

    def to_fee(self) -> Fee:
        return Fee(self.gas, Coins([Coin(self.denom, self.amount)]))


def std_fee(gas: int, denom: str, price: float) -> StdFee:
    try:
        amount = math.floor(Decimal(gas) * Decimal(str(price)))
    except (InvalidOperation, ValueError, OverflowError) as e:
        raise ConfigError(f"Invalid gas price: {price!r}") from e
    if amount < 0:
        raise ConfigError(f"Gas price must not be negative: {price!r}")
    return StdFee(gas=gas, amount=amount, denom=denom)


def build_fee_table(fee_token: str, gas_price: float) -> Mapping[str, StdFee]:
    """Fixed fee per operation kind, priced in ``fee_token``."""
    return MappingProxyType(
        {
            "upload": std_fee(UPLOAD_GAS, fee_token, gas_price),
            "init": std_fee(INIT_GAS, fee_token, gas_price),
            "migrate": std_fee(MIGRATE_GAS, fee_token, gas_price),
            "exec": std_fee(EXEC_GAS, fee_token, gas_price),
            "send": std_fee(SEND_GAS, fee_token, gas_price),
            "change_admin": std_fee(CHANGE_ADMIN_GAS, fee_token, gas_price),
        }
    )
