from .base import Deployment, deploy_contract, download_wasm, load_wasm
from .posts_filter import PostsFilterContract, PostsFilterContractInstance, filter_posts_contract

__all__ = [
    "Deployment",
    "PostsFilterContract",
    "PostsFilterContractInstance",
    "deploy_contract",
    "download_wasm",
    "filter_posts_contract",
    "load_wasm",
]
