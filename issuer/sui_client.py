"""Minimal Sui JSON-RPC client over requests."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)

SUI_COIN_TYPE = "0x2::sui::SUI"

class SuiRPCError(Exception):
    """A JSON-RPC level error returned by the fullnode."""

    def __init__(self, method: str, code: Any, message: str):
        self.method = method
        self.code = code
        super().__init__(f"{method} failed ({code}): {message}")

class SuiClient:
    def __init__(self, url: str, timeout: float = 60.0,
                 session: Optional[requests.Session] = None):
        self.url = url
        self.timeout = timeout
        # Without a session every call opens its own connection; nothing is shared
        # between concurrent requests.
        self.session = session or requests

    def call(self, method: str, params: List[Any]) -> Any:
        payload = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params}
        r = self.session.post(self.url, json=payload, timeout=self.timeout)
        r.raise_for_status()
        body = r.json()
        if not isinstance(body, dict):
            raise SuiRPCError(method, None, "response is not a JSON-RPC object")
        if body.get("error"):
            err = body["error"]
            raise SuiRPCError(method, err.get("code"), err.get("message", ""))
        return body.get("result")

    def get_object(self, object_id: str) -> Dict[str, Any]:
        result = self.call("sui_getObject", [object_id, {"showOwner": True}])
        if not isinstance(result, dict) or "data" not in result:
            err = result.get("error") if isinstance(result, dict) else None
            raise SuiRPCError("sui_getObject", None, f"object {object_id} not available: {err}")
        return result["data"]

    def get_normalized_move_function(self, package: str, module: str, function: str) -> Dict[str, Any]:
        result = self.call("sui_getNormalizedMoveFunction", [package, module, function])
        if not isinstance(result, dict):
            raise SuiRPCError("sui_getNormalizedMoveFunction", None, f"no function {package}::{module}::{function}")
        return result

    def get_reference_gas_price(self) -> int:
        return int(self.call("suix_getReferenceGasPrice", []))

    def get_coins(self, owner: str, coin_type: str = SUI_COIN_TYPE) -> List[Dict[str, Any]]:
        coins: List[Dict[str, Any]] = []
        cursor = None
        while True:
            page = self.call("suix_getCoins", [owner, coin_type, cursor, None])
            if not isinstance(page, dict):
                raise SuiRPCError("suix_getCoins", None, "missing coin page")
            coins.extend(page.get("data", []))
            if not page.get("hasNextPage"):
                return coins
            cursor = page.get("nextCursor")

    def execute_transaction_block(self, tx_bytes_b64: str, signatures: List[str],
                                  show_effects: bool = True) -> Dict[str, Any]:
        return self.call("sui_executeTransactionBlock", [
            tx_bytes_b64,
            signatures,
            {"showEffects": show_effects},
            "WaitForLocalExecution",
        ])
