# infra/rpc_client.py
from __future__ import annotations

import asyncio
import itertools
import json
import random
from typing import Any, Dict, List, Optional, Sequence

import aiohttp

from seeding.config import RpcConfig
from utils.logger import logger


class HttpError(Exception):
    def __init__(self, status: int, message: str, payload: Optional[dict] = None):
        super().__init__(f"HTTP {status}: {message}")
        self.status = status
        self.payload = payload or {}


class RpcError(Exception):
    def __init__(self, code: int, message: str, data: Any = None):
        self.code = code
        self.message = message
        self.data = data
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        base = f"JSON-RPC code={self.code}, message={self.message}"
        if self.data is not None:
            base += f", data={self.data}"
        return base


def _mask_url(url: str) -> str:
    # hosted node URLs often embed an API key as the last path segment
    head, sep, tail = url.rpartition("/")
    if not sep or len(tail) <= 8:
        return url
    return f"{head}/{tail[:4]}{'*' * (len(tail) - 8)}{tail[-4:]}"


class RpcClient:
    """
    JSON-RPC 2.0 client for a development node.
    Retries HTTP 429/5xx and network errors with exponential backoff; JSON-RPC
    error objects are raised as `RpcError` right away.
    """

    def __init__(self,
                 cfg: RpcConfig,
                 *,
                 session: Optional[aiohttp.ClientSession] = None,
                 ) -> None:
        if not cfg.url:
            raise ValueError("rpc url is required")
        self.url = cfg.url
        self.timeout_ms = cfg.timeout_ms
        self.max_attempts = cfg.max_attempts
        self.backoff_ms = cfg.backoff_ms

        self.session = session
        self._owned_session = session is None
        self._ids = itertools.count(1)

        logger.debug(f"RpcClient init url={_mask_url(self.url)} attempts={self.max_attempts}")

    # ---- async context manager ----------------------------------------------------
    async def __aenter__(self) -> "RpcClient":
        if self._owned_session and (self.session is None or self.session.closed):
            timeout = aiohttp.ClientTimeout(total=self.timeout_ms / 1000.0)
            self.session = aiohttp.ClientSession(timeout=timeout, raise_for_status=False, trust_env=True)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owned_session and self.session is not None and not self.session.closed:
            await self.session.close()

    # ---- core call ----------------------------------------------------------------
    async def call(self, method: str, params: Optional[Sequence[Any]] = None, *, retry: bool = True) -> Any:
        if self.session is None:
            raise RuntimeError("RpcClient used outside of its async context")
        body = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": list(params or [])}

        attempt = 0
        while True:
            attempt += 1
            try:
                async with self.session.post(
                    self.url,
                    json=body,
                    headers={"Content-Type": "application/json", "Accept": "application/json"},
                ) as resp:
                    text = await resp.text()
                    status = resp.status
                    if status >= 400:
                        if retry and (status >= 500 or status == 429) and attempt < self.max_attempts:
                            logger.warning(f"{method} got HTTP {status}, retrying (attempt {attempt})")
                            await self._sleep_backoff(attempt)
                            continue
                        raise HttpError(status, text[:256])

                    try:
                        payload: Dict[str, Any] = json.loads(text) if text else {}
                    except json.JSONDecodeError:
                        raise HttpError(status, f"invalid json: {text[:256]}")

                    err = payload.get("error")
                    if err:
                        raise RpcError(int(err.get("code", 0)), str(err.get("message", "")), err.get("data"))
                    if "result" not in payload:
                        raise HttpError(status, f"missing result: {text[:256]}", payload)
                    return payload["result"]
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                if retry and attempt < self.max_attempts:
                    logger.warning(f"Network error: {e} when calling {method}, retrying...")
                    await self._sleep_backoff(attempt)
                    continue
                raise HttpError(599, f"Network error: {e}") from e

    async def _sleep_backoff(self, attempt: int) -> None:
        base = self.backoff_ms * (2 ** (attempt - 1))
        jitter = random.randint(0, self.backoff_ms)
        await asyncio.sleep((base + jitter) / 1000.0)

    # ---- wrappers -----------------------------------------------------------------
    async def accounts(self) -> List[str]:
        return list(await self.call("eth_accounts"))

    async def net_version(self) -> str:
        return str(await self.call("net_version"))

    async def client_version(self) -> str:
        return str(await self.call("web3_clientVersion"))
