"""Extraction of normalized transfer records from ``jsonParsed`` transactions."""

from __future__ import annotations

from typing import Any, Optional

from .classifier import parsed_infos
from .jsonpath import lookup_str, lookup_uint
from .models import FieldMissing, NativeTransfer, TokenTransfer

SIGNATURE_PATH = "result.transaction.signatures.0"
SENDER_PATH = "result.transaction.message.accountKeys.0.pubkey"
DESTINATION_PATH = "result.transaction.message.instructions.0.parsed.info.destination"
LAMPORTS_PATH = "result.transaction.message.instructions.0.parsed.info.lamports"
BLOCK_TIME_PATH = "result.blockTime"


def _require_str(document: Any, path: str) -> str:
    value = lookup_str(document, path)
    if value is None:
        raise FieldMissing(path)
    return value


def _require_uint(document: Any, path: str) -> int:
    value = lookup_uint(document, path)
    if value is None:
        raise FieldMissing(path)
    return value


def extract_native(document: Any) -> NativeTransfer:
    """Build a :class:`NativeTransfer` from the first instruction of ``document``.

    Only instruction 0 is read, even when :func:`is_native_transfer` matched a
    later instruction. Raises :class:`FieldMissing` for the first required path
    that is absent or mistyped.
    """
    transaction_id = _require_str(document, SIGNATURE_PATH)
    sender = _require_str(document, SENDER_PATH)
    receiver = _require_str(document, DESTINATION_PATH)
    amount = _require_uint(document, LAMPORTS_PATH)
    timestamp = _require_uint(document, BLOCK_TIME_PATH)
    return NativeTransfer(
        transaction_id=transaction_id,
        sender=sender,
        receiver=receiver,
        amount=amount,
        timestamp=timestamp,
    )


def _account_fallback(info: dict, key: str) -> Optional[str]:
    value = info.get(key)
    if value is None:
        value = info.get("account")
    return value if isinstance(value, str) else None


def extract_fungible(document: Any, mint_filter: str) -> Optional[TokenTransfer]:
    """Return the first fully resolved transfer of ``mint_filter``, or ``None``."""
    for info in parsed_infos(document):
        if info.get("mint") != mint_filter:
            continue

        amount = lookup_str(info, "tokenAmount.uiAmountString")
        sender = _account_fallback(info, "source")
        receiver = _account_fallback(info, "destination")
        if amount is None or sender is None or receiver is None:
            continue

        transaction_id = lookup_str(document, SIGNATURE_PATH)
        timestamp = lookup_uint(document, BLOCK_TIME_PATH)
        if transaction_id is None or timestamp is None:
            return None
        return TokenTransfer(
            transaction_id=transaction_id,
            sender=sender,
            receiver=receiver,
            amount=amount,
            timestamp=timestamp,
        )
    return None
