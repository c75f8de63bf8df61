import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_ENDPOINT = "https://api.mainnet-beta.solana.com"
ENDPOINT_ENV = "SOLANA_RPC_URL"


@dataclass(frozen=True)
class RPCConfig:
    endpoint: str = DEFAULT_ENDPOINT
    commitment: str = "confirmed"
    timeout: float = 10.0
    retries: int = 3


@dataclass(frozen=True)
class AppConfig:
    rpc: RPCConfig = field(default_factory=RPCConfig)
    signature_limit: int = 10
    output_dir: str = "serializations"
    table_format: str = "grid"
    log_level: str = "INFO"


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    raw: Dict[str, Any] = {}
    if config_path is not None and config_path.exists():
        try:
            with config_path.open("r", encoding="utf-8") as fh:
                loaded = yaml.safe_load(fh)
        except yaml.YAMLError as exc:
            raise ValueError(f"invalid config file {config_path}: {exc}") from exc
        if loaded is not None and not isinstance(loaded, dict):
            raise ValueError(f"config file {config_path} must contain a mapping")
        raw = loaded or {}

    rpc_raw: Dict[str, Any] = raw.get("rpc") or {}
    if not isinstance(rpc_raw, dict):
        raise ValueError("rpc section must be a mapping")
    endpoint = os.getenv(ENDPOINT_ENV) or rpc_raw.get("endpoint", DEFAULT_ENDPOINT)
    rpc = RPCConfig(
        endpoint=endpoint,
        commitment=rpc_raw.get("commitment", "confirmed"),
        timeout=float(rpc_raw.get("timeout", 10.0)),
        retries=int(rpc_raw.get("retries", 3)),
    )
    return AppConfig(
        rpc=rpc,
        signature_limit=int(raw.get("signature_limit", 10)),
        output_dir=str(raw.get("output_dir", "serializations")),
        table_format=str(raw.get("table_format", "grid")),
        log_level=str(raw.get("log_level", "INFO")).upper(),
    )
