"""Resilient Solana JSON-RPC client with explicit error mapping."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests
from requests.adapters import HTTPAdapter, Retry

from .config import RPCConfig
from .models import SignatureInfo

logger = logging.getLogger(__name__)


@dataclass
class SolanaRPCError(Exception):
    """Domain error that carries HTTP context for RPC failures."""

    message: str
    http_status: Optional[int] = None
    body: Optional[str] = None
    rpc_error: Optional[Any] = None
    cause: Optional[BaseException] = None

    def __str__(self) -> str:
        suffix = []
        if self.http_status is not None:
            suffix.append(f"status={self.http_status}")
        if self.rpc_error is not None:
            suffix.append(f"error={self.rpc_error}")
        if self.body:
            suffix.append(f"body={self.body[:200]}")
        if self.cause:
            suffix.append(f"cause={self.cause}")
        detail = ", ".join(suffix)
        return f"{self.message} ({detail})" if detail else self.message


class SolanaRPCClient:
    def __init__(self, config: RPCConfig, user_agent: str = "solana-history/0.1") -> None:
        self.config = config
        self.endpoint = config.endpoint.rstrip("/")
        self.session = requests.Session()
        retry_policy = Retry(
            total=config.retries,
            backoff_factor=0.2,
            status_forcelist=(429, 500, 502, 503, 504),
            allowed_methods=("POST",),
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry_policy)
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)
        self.session.headers.update({"User-Agent": user_agent})

    def _send(self, method: str, params: List[Any]) -> requests.Response:
        payload = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": method,
            "params": params,
        }
        logger.debug("rpc %s -> %s", method, self.endpoint)
        try:
            response = self.session.post(self.endpoint, json=payload, timeout=self.config.timeout)
        except requests.RequestException as exc:
            raise SolanaRPCError(f"{method} request failed", cause=exc) from exc

        if response.status_code != 200:
            raise SolanaRPCError(
                f"{method} returned non-200 status",
                http_status=response.status_code,
                body=response.text,
            )
        return response

    def _post(self, method: str, params: List[Any]) -> Dict[str, Any]:
        response = self._send(method, params)
        try:
            document = response.json()
        except ValueError as exc:
            raise SolanaRPCError(
                f"{method} response was not valid JSON",
                http_status=response.status_code,
                body=response.text,
                cause=exc,
            ) from exc
        if not isinstance(document, dict):
            raise SolanaRPCError(f"{method} response was not a JSON object", body=response.text)
        if document.get("error") is not None:
            raise SolanaRPCError(f"{method} returned an error", rpc_error=document["error"])
        return document

    def get_signatures(self, address: str, limit: int = 10, before: Optional[str] = None) -> List[SignatureInfo]:
        args: Dict[str, Any] = {"limit": limit, "commitment": self.config.commitment}
        if before:
            args["before"] = before
        document = self._post("getSignaturesForAddress", [address, args])
        entries = document.get("result") or []
        if not isinstance(entries, list):
            raise SolanaRPCError("getSignaturesForAddress result was not a list")
        try:
            return [SignatureInfo.from_json(item) for item in entries]
        except (TypeError, ValueError, AttributeError) as exc:
            raise SolanaRPCError("getSignaturesForAddress returned a malformed entry", cause=exc) from exc

    def _transaction_params(self, signature: str) -> List[Any]:
        return [
            signature,
            {
                "encoding": "jsonParsed",
                "commitment": self.config.commitment,
                "maxSupportedTransactionVersion": 0,
            },
        ]

    def get_transaction(self, signature: str) -> Dict[str, Any]:
        """Full ``getTransaction`` response document, ``result`` at the root."""
        return self._post("getTransaction", self._transaction_params(signature))

    def get_transaction_text(self, signature: str) -> str:
        return self._send("getTransaction", self._transaction_params(signature)).text
