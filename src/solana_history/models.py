from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional

from .jsonpath import last_field

SOL_DECIMALS = 9
LAMPORTS_PER_SOL = 10**SOL_DECIMALS


class FieldMissing(ValueError):
    """A required field was absent or mistyped while extracting a transfer."""

    def __init__(self, path: str) -> None:
        self.path = path
        self.field = last_field(path)
        super().__init__(f"missing or invalid field: {path}")


@dataclass(frozen=True)
class NativeTransfer:
    transaction_id: str
    sender: str
    receiver: str
    amount: int
    timestamp: int

    @property
    def sol_amount(self) -> Decimal:
        return Decimal(self.amount) / Decimal(LAMPORTS_PER_SOL)


@dataclass(frozen=True)
class TokenTransfer:
    transaction_id: str
    sender: str
    receiver: str
    amount: str
    timestamp: int


@dataclass(frozen=True)
class SignatureInfo:
    signature: str
    slot: int
    block_time: Optional[int] = None
    confirmation_status: Optional[str] = None
    err: Optional[Any] = None
    memo: Optional[str] = None

    @classmethod
    def from_json(cls, item: Dict[str, Any]) -> "SignatureInfo":
        signature = item.get("signature")
        if not isinstance(signature, str):
            raise ValueError("signature entry missing signature")
        return cls(
            signature=signature,
            slot=int(item.get("slot", 0)),
            block_time=item.get("blockTime"),
            confirmation_status=item.get("confirmationStatus"),
            err=item.get("err"),
            memo=item.get("memo"),
        )
