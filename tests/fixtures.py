from typing import Any, Dict, List, Optional

_UNSET: Any = object()


def transaction_document(
    instructions: List[Dict[str, Any]],
    signature: Optional[str] = "SIG1",
    block_time: Any = 1700000000,
    account_keys: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    transaction: Dict[str, Any] = {
        "message": {
            "accountKeys": account_keys if account_keys is not None else [{"pubkey": "SENDER", "signer": True}],
            "instructions": instructions,
        }
    }
    if signature is not None:
        transaction["signatures"] = [signature]
    result: Dict[str, Any] = {"transaction": transaction, "slot": 1}
    if block_time is not None:
        result["blockTime"] = block_time
    return {"jsonrpc": "2.0", "id": 1, "result": result}


def system_transfer(destination: str = "DEST", lamports: Any = 1_500_000_000, source: str = "SENDER") -> Dict[str, Any]:
    return {
        "program": "system",
        "parsed": {
            "type": "transfer",
            "info": {"source": source, "destination": destination, "lamports": lamports},
        },
    }


def token_transfer(
    mint: str = "MINT1",
    amount: Optional[str] = "2.5",
    source: Any = "A",
    destination: Any = "B",
    account: Any = _UNSET,
) -> Dict[str, Any]:
    info: Dict[str, Any] = {"mint": mint, "tokenAmount": {"uiAmountString": amount} if amount is not None else {}}
    if source is not None:
        info["source"] = source
    if destination is not None:
        info["destination"] = destination
    if account is not _UNSET:
        info["account"] = account
    return {"program": "spl-token", "parsed": {"type": "transferChecked", "info": info}}


def native_document(**kwargs: Any) -> Dict[str, Any]:
    return transaction_document([system_transfer()], **kwargs)
