from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

import requests

from ..deploy import CodeMeta, Deployer
from ..msgs import EditReportsLimit, GetFilteredPosts, InitMsg, PostQueryResponse, parse_message
from .base import load_wasm

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PostsFilterContractInstance:
    client: Deployer
    contract_address: str

    def get_filtered_posts(self, reports_limit: int) -> PostQueryResponse:
        query = parse_message(GetFilteredPosts, {"reports_limit": reports_limit})
        result = self.client.query_contract(self.contract_address, query.to_wire())
        return parse_message(PostQueryResponse, result)

    def edit_reports_limit(self, reports_limit: int) -> str:
        msg = parse_message(EditReportsLimit, {"reports_limit": reports_limit})
        result = self.client.execute_contract(self.contract_address, msg.to_wire())
        return result.txhash


@dataclass(frozen=True)
class PostsFilterContract:
    """
    Factory for one posts filter contract build.

    ``contract_source`` is where the wasm lives (an URL or a local path),
    ``meta_source`` and ``builder_source`` describe where the code and the
    optimizer image come from and travel with every upload.
    """

    client: Deployer
    meta_source: str
    builder_source: str
    contract_source: str
    session: Optional[requests.Session] = None

    def upload(self) -> int:
        # no caching, every call stores a new code id
        wasm = load_wasm(self.contract_source, session=self.session)
        meta = CodeMeta(source=self.meta_source, builder=self.builder_source)
        return self.client.store_code(wasm, meta)

    def instantiate(
        self,
        code_id: int,
        init_msg: Union[InitMsg, Mapping[str, Any]],
        label: str,
        admin: Optional[str] = None,
    ) -> PostsFilterContractInstance:
        msg = parse_message(InitMsg, init_msg)
        contract_address = self.client.instantiate_contract(
            code_id, msg.to_wire(), label, admin=admin, memo=f"Init {label}"
        )
        return self.use(contract_address)

    def use(self, contract_address: str) -> PostsFilterContractInstance:
        return PostsFilterContractInstance(self.client, contract_address)


def filter_posts_contract(
    client: Deployer,
    meta_source: str,
    builder_source: str,
    contract_source: str,
    *,
    session: Optional[requests.Session] = None,
) -> PostsFilterContract:
    return PostsFilterContract(client, meta_source, builder_source, contract_source, session)
