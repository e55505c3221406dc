#------------------------
#   Send a small amount to a random address so the chain knows our pubkey.
#   Run with: $ DESMOS_MNEMONIC="..." python scripts/setup_account.py
#------------------------
import argparse

from dotenv import load_dotenv

from desmos_deploy import connect, options_from_env
from desmos_deploy.runner import require_mnemonic, run
from desmos_deploy.wallet import random_address


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Make the chain learn the account's pubkey")
    parser.add_argument("--amount", type=int, default=226644)
    parser.add_argument("--denom", default=None)
    return parser.parse_args(argv)


def main():
    load_dotenv()
    args = parse_args()
    options = options_from_env()
    client, address = connect(require_mnemonic(), options=options)
    recipient = random_address(options.bech32_prefix, options.coin_type)
    result = client.send_tokens(recipient, args.amount, args.denom, "Ensure chain has my pubkey")
    print(f"{address} -> {recipient}: {result.txhash}")


if __name__ == "__main__":
    run(main)
