#------------------------
#   Upload a wasm, instantiate it and optionally fund the new contract.
#   Run with: $ DESMOS_MNEMONIC="..." python scripts/deploy_contract.py artifacts/contract.wasm '{"reports_limit": 5}'
#------------------------
import argparse
import json

from dotenv import load_dotenv

from desmos_deploy import CodeMeta, ConfigError, connect, options_from_env
from desmos_deploy.contracts import deploy_contract
from desmos_deploy.runner import require_mnemonic, run


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Store and instantiate a CosmWasm contract")
    parser.add_argument("source", help="wasm URL or local path")
    parser.add_argument("init_msg", help="instantiate message as JSON")
    parser.add_argument("--label", default="contract")
    parser.add_argument("--admin", default=None)
    parser.add_argument("--builder", default="cosmwasm/rust-optimizer:0.10.7")
    parser.add_argument("--fund", type=int, default=0, help="amount sent to the contract after instantiation")
    parser.add_argument("--denom", default=None)
    return parser.parse_args(argv)


def main():
    load_dotenv()
    args = parse_args()
    try:
        init_msg = json.loads(args.init_msg)
    except json.JSONDecodeError as e:
        raise ConfigError(f"init_msg is not valid JSON: {e}") from e

    client, address = connect(require_mnemonic(), options=options_from_env())
    print("store contract")
    code_id, contract_address = deploy_contract(
        client,
        args.source,
        init_msg,
        args.label,
        admin=args.admin,
        meta=CodeMeta(source=args.source, builder=args.builder),
    )
    print(f"stored {code_id}")
    print(f"instantiated {contract_address}")

    if args.fund:
        result = client.send_tokens(contract_address, args.fund, args.denom)
        print(f"funded {contract_address} in {result.txhash}")


if __name__ == "__main__":
    run(main)
