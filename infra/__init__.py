# infra/__init__.py
from __future__ import annotations

from typing import Any, List, Optional, Protocol, Sequence

from infra.rpc_client import RpcClient, RpcError, HttpError
from utils.logger import logger


# ========== Port: upper layers depend on this, not on RpcClient ==========
class RpcPort(Protocol):
    async def call(self, method: str, params: Optional[Sequence[Any]] = None, *, retry: bool = True) -> Any: ...
    async def accounts(self) -> List[str]: ...
    async def net_version(self) -> str: ...
    async def client_version(self) -> str: ...


# ========== Health probe ==========
async def rpc_healthcheck(rpc: RpcPort) -> bool:
    try:
        version = await rpc.client_version()
    except (RpcError, HttpError) as e:
        logger.warning(f"RPC healthcheck failed: {e}")
        return False
    logger.debug(f"RPC node up: {version}")
    return True


__all__ = ["RpcPort", "RpcClient", "RpcError", "HttpError", "rpc_healthcheck"]
