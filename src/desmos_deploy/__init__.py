from .contracts import PostsFilterContract, PostsFilterContractInstance, filter_posts_contract
from .deploy import CodeMeta, Connection, Deployer, connect
from .errors import (
    ChainConnectionError,
    ChainError,
    ConfigError,
    DeployError,
    DownloadError,
    ExecuteError,
    FaucetError,
    MessageValidationError,
)
from .msgs import InitMsg, Post, PostQueryResponse
from .options import DEFAULT_OPTIONS, Options, build_fee_table, options_from_env

__all__ = [
    "ChainConnectionError",
    "ChainError",
    "CodeMeta",
    "ConfigError",
    "Connection",
    "DEFAULT_OPTIONS",
    "DeployError",
    "Deployer",
    "DownloadError",
    "ExecuteError",
    "FaucetError",
    "InitMsg",
    "MessageValidationError",
    "Options",
    "Post",
    "PostQueryResponse",
    "PostsFilterContract",
    "PostsFilterContractInstance",
    "build_fee_table",
    "connect",
    "filter_posts_contract",
    "options_from_env",
]
