from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from desmos_deploy.contracts import deploy_contract, filter_posts_contract
from desmos_deploy.deploy import CodeMeta
from desmos_deploy.errors import DownloadError, MessageValidationError
from desmos_deploy.msgs import PostQueryResponse

from .fakes import FakeChainClient, FakeResponse, FakeSession, post

META = "https://github.com/bragaz/wasm-test-contract/tree/v0.2.2"
BUILDER = "cosmwasm/rust-optimizer:0.10.7"
WASM_URL = "https://example.com/my_first_contract.wasm"
WASM = b"\x00asm\x01\x00\x00\x00"


class TestUse(unittest.TestCase):
    def test_use_binds_address_without_network(self) -> None:
        client = FakeChainClient()
        session = FakeSession(FakeResponse(200, WASM))
        factory = filter_posts_contract(client, META, BUILDER, WASM_URL, session=session)

        instance = factory.use("desmos1w8efgymkdqafech2c0y40hgvxa23tmmgsmuz66")

        self.assertEqual(instance.contract_address, "desmos1w8efgymkdqafech2c0y40hgvxa23tmmgsmuz66")
        self.assertEqual(client.calls, [])
        self.assertEqual(session.calls, [])

    def test_instance_address_is_immutable(self) -> None:
        instance = filter_posts_contract(FakeChainClient(), META, BUILDER, WASM_URL).use("desmos1abc")
        with self.assertRaises(AttributeError):
            instance.contract_address = "desmos1other"  # type: ignore[misc]


class TestUpload(unittest.TestCase):
    def test_upload_sends_bytecode_and_meta(self) -> None:
        client = FakeChainClient()
        session = FakeSession(FakeResponse(200, WASM))
        factory = filter_posts_contract(client, META, BUILDER, WASM_URL, session=session)

        code_id = factory.upload()

        self.assertEqual(code_id, 1)
        self.assertEqual(session.calls[0]["url"], WASM_URL)
        name, (wasm, meta), _ = client.calls[0]
        self.assertEqual(name, "store_code")
        self.assertEqual(wasm, WASM)
        self.assertEqual(meta, CodeMeta(source=META, builder=BUILDER))

    def test_upload_is_not_cached(self) -> None:
        client = FakeChainClient()
        factory = filter_posts_contract(client, META, BUILDER, WASM_URL, session=FakeSession(FakeResponse(200, WASM)))
        self.assertEqual([factory.upload(), factory.upload()], [1, 2])

    def test_upload_non_200_is_download_error(self) -> None:
        client = FakeChainClient()
        factory = filter_posts_contract(client, META, BUILDER, WASM_URL, session=FakeSession(FakeResponse(404)))

        with self.assertRaises(DownloadError) as ctx:
            factory.upload()

        self.assertEqual(ctx.exception.status_code, 404)
        self.assertIn("404", str(ctx.exception))
        self.assertEqual(client.calls, [])

    def test_upload_from_local_file(self) -> None:
        client = FakeChainClient()
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "contract.wasm"
            path.write_bytes(WASM)
            factory = filter_posts_contract(client, META, BUILDER, str(path))
            factory.upload()
        self.assertEqual(client.calls[0][1][0], WASM)

    def test_upload_missing_local_file(self) -> None:
        factory = filter_posts_contract(FakeChainClient(), META, BUILDER, "/nonexistent/contract.wasm")
        with self.assertRaises(DownloadError) as ctx:
            factory.upload()
        self.assertIsNone(ctx.exception.status_code)


class TestInstantiate(unittest.TestCase):
    def test_instantiate_returns_bound_instance(self) -> None:
        client = FakeChainClient()
        factory = filter_posts_contract(client, META, BUILDER, WASM_URL)

        instance = factory.instantiate(1, {"reports_limit": 2}, "test")

        self.assertEqual(instance.contract_address, "desmos1contract0")
        name, (code_id, init_msg, label), kwargs = client.calls[0]
        self.assertEqual((name, code_id, init_msg, label), ("instantiate_contract", 1, {"reports_limit": 2}, "test"))
        self.assertEqual(kwargs, {"admin": None, "memo": "Init test"})

    def test_instantiate_passes_admin(self) -> None:
        client = FakeChainClient()
        factory = filter_posts_contract(client, META, BUILDER, WASM_URL)
        factory.instantiate(4, {"reports_limit": 5}, "posts filter", admin=client.address)
        self.assertEqual(client.calls[0][2]["admin"], "desmos1sender")

    def test_instantiate_validates_locally(self) -> None:
        client = FakeChainClient()
        factory = filter_posts_contract(client, META, BUILDER, WASM_URL)
        for bad in ({}, {"reports_limit": -1}, {"reports_limit": "2"}, {"reports_limit": 2, "x": 1}):
            with self.assertRaises(MessageValidationError):
                factory.instantiate(1, bad, "test")
        self.assertEqual(client.calls, [])

    def test_fresh_contract_has_no_posts(self) -> None:
        factory = filter_posts_contract(FakeChainClient(), META, BUILDER, WASM_URL)
        instance = factory.instantiate(1, {"reports_limit": 2}, "test")
        self.assertEqual(instance.get_filtered_posts(2), PostQueryResponse(posts=[]))


class TestInstance(unittest.TestCase):
    def setUp(self) -> None:
        self.client = FakeChainClient(posts=[post("1", reports=0), post("2", reports=3), post("3", reports=1)])
        self.factory = filter_posts_contract(self.client, META, BUILDER, WASM_URL)
        self.instance = self.factory.instantiate(1, {"reports_limit": 2}, "test")

    def test_query_message_shape(self) -> None:
        self.instance.get_filtered_posts(2)
        name, (address, query), _ = self.client.calls[-1]
        self.assertEqual(name, "query_contract")
        self.assertEqual(address, self.instance.contract_address)
        self.assertEqual(query, {"get_filtered_posts": {"reports_limit": 2}})

    def test_query_keeps_order_and_is_idempotent(self) -> None:
        first = self.instance.get_filtered_posts(2)
        second = self.instance.get_filtered_posts(2)
        self.assertEqual(first, second)
        self.assertEqual([p.post_id for p in first.posts], ["1", "3"])

    def test_edit_reports_limit_returns_tx_hash(self) -> None:
        tx_hash = self.instance.edit_reports_limit(5)
        self.assertIsInstance(tx_hash, str)
        self.assertTrue(tx_hash)
        name, (address, msg), _ = self.client.calls[-1]
        self.assertEqual(name, "execute_contract")
        self.assertEqual(msg, {"edit_reports_limit": {"reports_limit": 5}})

    def test_edit_then_query_reflects_limit(self) -> None:
        self.instance.edit_reports_limit(5)
        limit = self.client.contracts[self.instance.contract_address]["reports_limit"]
        self.assertEqual(limit, 5)
        posts = self.instance.get_filtered_posts(limit).posts
        self.assertEqual([p.post_id for p in posts], ["1", "2", "3"])

    def test_each_edit_is_a_new_transaction(self) -> None:
        self.assertNotEqual(self.instance.edit_reports_limit(5), self.instance.edit_reports_limit(6))

    def test_invalid_limits_never_reach_the_chain(self) -> None:
        calls = len(self.client.calls)
        with self.assertRaises(MessageValidationError):
            self.instance.edit_reports_limit(70000)
        with self.assertRaises(MessageValidationError):
            self.instance.get_filtered_posts(-1)
        self.assertEqual(len(self.client.calls), calls)


class TestDeployContract(unittest.TestCase):
    def test_upload_then_instantiate(self) -> None:
        client = FakeChainClient()
        session = FakeSession(FakeResponse(200, WASM))

        code_id, address = deploy_contract(
            client, WASM_URL, {"reports_limit": 3}, "Subkey test", admin="desmos1admin", session=session
        )

        self.assertEqual((code_id, address), (1, "desmos1contract0"))
        self.assertEqual([c[0] for c in client.calls], ["store_code", "instantiate_contract"])
        self.assertEqual(client.calls[1][2], {"admin": "desmos1admin", "memo": "Init Subkey test"})


if __name__ == "__main__":
    unittest.main()
