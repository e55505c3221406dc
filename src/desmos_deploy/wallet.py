from __future__ import annotations

from mnemonic import Mnemonic
from terra_sdk.core.bech32 import AccAddress, get_bech
from terra_sdk.key.mnemonic import MnemonicKey

from .errors import ChainConnectionError
from .options import DESMOS_COIN_TYPE

_WORDLIST = Mnemonic("english")


def hd_path(coin_type: int = DESMOS_COIN_TYPE, account: int = 0, index: int = 0) -> str:
    return f"m/44'/{coin_type}'/{account}'/0/{index}"


class PrefixedMnemonicKey(MnemonicKey):
    """MnemonicKey whose account address uses a chain-specific bech32 prefix."""

    def __init__(
        self,
        mnemonic: str,
        prefix: str,
        coin_type: int = DESMOS_COIN_TYPE,
        account: int = 0,
        index: int = 0,
    ):
        super().__init__(mnemonic=mnemonic, account=account, index=index, coin_type=coin_type)
        self.prefix = prefix

    @property
    def acc_address(self) -> AccAddress:
        if not self.raw_address:
            raise ValueError("could not compute acc_address: missing raw_address")
        return AccAddress(get_bech(self.prefix, self.raw_address))


def build_wallet_key(
    mnemonic: str, prefix: str, coin_type: int = DESMOS_COIN_TYPE, index: int = 0
) -> PrefixedMnemonicKey:
    phrase = " ".join((mnemonic or "").split())
    if not _WORDLIST.check(phrase):
        raise ChainConnectionError("Invalid mnemonic: word list or checksum mismatch")
    try:
        return PrefixedMnemonicKey(phrase, prefix, coin_type=coin_type, index=index)
    except (ValueError, TypeError) as e:
        raise ChainConnectionError(f"Wallet derivation failed for {hd_path(coin_type, 0, index)}: {e}") from e


def mnemonic_to_address(mnemonic: str, prefix: str, coin_type: int = DESMOS_COIN_TYPE) -> str:
    return build_wallet_key(mnemonic, prefix, coin_type).acc_address


def random_address(prefix: str, coin_type: int = DESMOS_COIN_TYPE) -> str:
    # 16 bytes of entropy, 12 words
    return mnemonic_to_address(_WORDLIST.generate(strength=128), prefix, coin_type)
