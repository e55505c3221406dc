#------------------------
#   Run with: $ python scripts/hit_faucet.py https://faucet.example desmos1...
#------------------------
import argparse

from dotenv import load_dotenv

from desmos_deploy import options_from_env
from desmos_deploy.faucet import hit_faucet
from desmos_deploy.runner import run


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Request tokens from a faucet")
    parser.add_argument("faucet_url")
    parser.add_argument("address")
    parser.add_argument("--denom", default=None, help="defaults to the fee token")
    return parser.parse_args(argv)


def main():
    load_dotenv()
    args = parse_args()
    denom = args.denom or options_from_env().fee_token
    print(hit_faucet(args.faucet_url, args.address, denom))


if __name__ == "__main__":
    run(main)
