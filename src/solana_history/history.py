"""Drives signature listing and per-signature transaction retrieval."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List

from .models import NativeTransfer, TokenTransfer
from .report import build_fungible_report, build_native_report
from .rpc import SolanaRPCClient

logger = logging.getLogger(__name__)

FILE_PREFIX_WIDTH = 10


class HistoryFetcher:
    def __init__(self, client: SolanaRPCClient, limit: int = 10) -> None:
        self.client = client
        self.limit = limit

    def iter_documents(self, address: str) -> Iterator[Dict[str, Any]]:
        signatures = self.client.get_signatures(address, limit=self.limit)
        logger.info("fetched %d signatures for %s", len(signatures), address)
        for info in signatures:
            yield self.client.get_transaction(info.signature)

    def native_history(self, address: str) -> List[NativeTransfer]:
        return build_native_report(self.iter_documents(address))

    def fungible_history(self, address: str, mint: str) -> List[TokenTransfer]:
        return build_fungible_report(self.iter_documents(address), mint)

    def save_history(self, address: str, output_dir: Path) -> List[Path]:
        output_dir.mkdir(parents=True, exist_ok=True)
        written: List[Path] = []
        for info in self.client.get_signatures(address, limit=self.limit):
            if info.block_time is None:
                logger.debug("no block time available for signature %s", info.signature)
                continue
            payload = self.client.get_transaction_text(info.signature)
            path = output_dir / f"{info.signature[:FILE_PREFIX_WIDTH]}.json"
            path.write_text(payload, encoding="utf-8")
            logger.debug("transaction data written to %s", path)
            written.append(path)
        return written
