#------------------------
#   Run with: $ DESMOS_MNEMONIC="..." python scripts/send_tokens.py desmos1... 1400000000 --denom stake
#------------------------
import argparse

from dotenv import load_dotenv

from desmos_deploy import connect, options_from_env
from desmos_deploy.runner import require_mnemonic, run


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Send tokens from the DESMOS_MNEMONIC account")
    parser.add_argument("recipient")
    parser.add_argument("amount", type=int)
    parser.add_argument("--denom", default=None, help="defaults to the fee token")
    parser.add_argument("--memo", default="Sending tokens from faucet")
    return parser.parse_args(argv)


def main():
    load_dotenv()
    args = parse_args()
    client, address = connect(require_mnemonic(), options=options_from_env())
    result = client.send_tokens(args.recipient, args.amount, args.denom, args.memo)
    print(f"{address} -> {args.recipient}: {result.txhash}")


if __name__ == "__main__":
    run(main)
