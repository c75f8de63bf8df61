"""Predicates deciding which kind of transfer a transaction document carries."""

from __future__ import annotations

from typing import Any, Dict, Iterator

from .jsonpath import lookup, lookup_list

INSTRUCTIONS_PATH = "result.transaction.message.instructions"


def parsed_infos(document: Any) -> Iterator[Dict[str, Any]]:
    """Yield ``parsed.info`` of every instruction that has one, in document order."""
    for instruction in lookup_list(document, INSTRUCTIONS_PATH) or []:
        info = lookup(instruction, "parsed.info")
        if isinstance(info, dict):
            yield info


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_native_transfer(document: Any) -> bool:
    for info in parsed_infos(document):
        if _is_number(info.get("lamports")) and isinstance(info.get("destination"), str):
            return True
    return False


def is_fungible_transfer(document: Any) -> bool:
    for info in parsed_infos(document):
        if isinstance(info.get("mint"), str) and info.get("tokenAmount") is not None:
            return True
    return False
