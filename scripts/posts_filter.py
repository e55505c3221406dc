#------------------------
#   Run with: $ DESMOS_MNEMONIC="..." python scripts/posts_filter.py upload
#------------------------
import argparse

from dotenv import load_dotenv

from desmos_deploy import connect, filter_posts_contract, options_from_env
from desmos_deploy.runner import require_mnemonic, run

META_SOURCE = "https://github.com/bragaz/wasm-test-contract/tree/v0.2.2"
BUILDER = "cosmwasm/rust-optimizer:0.10.7"
CONTRACT_SOURCE = "https://github.com/bragaz/wasm-test-contract/releases/download/v0.2.2/my_first_contract.wasm"


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Upload, instantiate and use the posts filter contract")
    parser.add_argument("--source", default=CONTRACT_SOURCE, help="wasm URL or local path")
    parser.add_argument("--meta-source", default=META_SOURCE)
    parser.add_argument("--builder", default=BUILDER)
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("upload")

    init = sub.add_parser("instantiate")
    init.add_argument("code_id", type=int)
    init.add_argument("--reports-limit", type=int, default=5)
    init.add_argument("--label", default="posts filter")
    init.add_argument("--admin", default=None)

    query = sub.add_parser("query")
    query.add_argument("contract")
    query.add_argument("--reports-limit", type=int, default=5)

    edit = sub.add_parser("edit-limit")
    edit.add_argument("contract")
    edit.add_argument("reports_limit", type=int)
    return parser.parse_args(argv)


def main():
    load_dotenv()
    args = parse_args()
    client, address = connect(require_mnemonic(), options=options_from_env())
    factory = filter_posts_contract(client, args.meta_source, args.builder, args.source)

    if args.command == "upload":
        code_id = factory.upload()
        print(f"stored {code_id}")
    elif args.command == "instantiate":
        admin = args.admin or address
        contract = factory.instantiate(args.code_id, {"reports_limit": args.reports_limit}, args.label, admin)
        print(f"instantiated {contract.contract_address}")
    elif args.command == "query":
        result = factory.use(args.contract).get_filtered_posts(args.reports_limit)
        print(result.model_dump_json(indent=2))
    elif args.command == "edit-limit":
        tx_hash = factory.use(args.contract).edit_reports_limit(args.reports_limit)
        print(f"edited reports limit in {tx_hash}")


if __name__ == "__main__":
    run(main)
