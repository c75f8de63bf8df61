"""Turns fetched transaction documents into ordered transfer records and tables."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Iterable, List, Sequence

from tabulate import tabulate

from .classifier import is_fungible_transfer, is_native_transfer
from .extractor import SIGNATURE_PATH, extract_fungible, extract_native
from .jsonpath import lookup_str
from .models import FieldMissing, NativeTransfer, TokenTransfer

logger = logging.getLogger(__name__)

HEADERS = ["Tx ID", "Sender", "Receiver", "Amount", "Timestamp"]
TX_ID_WIDTH = 10


def build_native_report(documents: Iterable[Any]) -> List[NativeTransfer]:
    transfers: List[NativeTransfer] = []
    for document in documents:
        if not is_native_transfer(document):
            continue
        try:
            transfers.append(extract_native(document))
        except FieldMissing as exc:
            signature = lookup_str(document, SIGNATURE_PATH) or "<unknown>"
            logger.warning("skipping SOL transfer %s: %s", signature, exc)
    return transfers


def build_fungible_report(documents: Iterable[Any], mint: str) -> List[TokenTransfer]:
    transfers: List[TokenTransfer] = []
    for document in documents:
        if not is_fungible_transfer(document):
            continue
        transfer = extract_fungible(document, mint)
        if transfer is None:
            logger.debug("no %s transfer in %s", mint, lookup_str(document, SIGNATURE_PATH))
            continue
        transfers.append(transfer)
    return transfers


def format_timestamp(timestamp: int) -> str:
    try:
        moment = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        # out of datetime range; show the raw unix seconds
        return str(timestamp)
    return moment.strftime("%Y-%m-%d %H:%M:%S UTC")


def native_rows(transfers: Iterable[NativeTransfer]) -> List[List[str]]:
    return [
        [
            transfer.transaction_id[:TX_ID_WIDTH],
            transfer.sender,
            transfer.receiver,
            f"{transfer.sol_amount:f}",
            format_timestamp(transfer.timestamp),
        ]
        for transfer in transfers
    ]


def token_rows(transfers: Iterable[TokenTransfer]) -> List[List[str]]:
    return [
        [
            transfer.transaction_id[:TX_ID_WIDTH],
            transfer.sender,
            transfer.receiver,
            transfer.amount,
            format_timestamp(transfer.timestamp),
        ]
        for transfer in transfers
    ]


def render_table(rows: Sequence[Sequence[str]], table_format: str = "grid") -> str:
    return tabulate(rows, headers=HEADERS, tablefmt=table_format, disable_numparse=True)
