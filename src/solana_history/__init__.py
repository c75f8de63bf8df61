from .classifier import is_fungible_transfer, is_native_transfer
from .config import AppConfig, RPCConfig, load_config
from .extractor import extract_fungible, extract_native
from .history import HistoryFetcher
from .models import FieldMissing, NativeTransfer, SignatureInfo, TokenTransfer
from .report import build_fungible_report, build_native_report, format_timestamp
from .rpc import SolanaRPCClient, SolanaRPCError

__all__ = [
    "AppConfig",
    "RPCConfig",
    "load_config",
    "FieldMissing",
    "NativeTransfer",
    "SignatureInfo",
    "TokenTransfer",
    "HistoryFetcher",
    "SolanaRPCClient",
    "SolanaRPCError",
    "build_fungible_report",
    "build_native_report",
    "extract_fungible",
    "extract_native",
    "format_timestamp",
    "is_fungible_transfer",
    "is_native_transfer",
]
