import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from solana.rpc.api import Client
from solana.rpc.commitment import Commitment

from .config import AppConfig, RPCConfig, load_config
from .history import HistoryFetcher
from .log import setup_logging
from .report import native_rows, render_table, token_rows
from .rpc import SolanaRPCClient, SolanaRPCError
from .wallet import WalletError, generate_keypair, load_keypair, send_sol, send_token

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="solana-history", description="Solana transaction history and transfer tool")
    parser.add_argument("--config", type=Path, default=Path("solana_history.yaml"), help="YAML config file")
    parser.add_argument("--limit", type=int, default=None, help="Number of signatures to fetch")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR")
    commands = parser.add_subparsers(dest="command", required=True)

    save = commands.add_parser("save-history", help="Fetch transaction history and save each transaction to a file")
    save.add_argument("-u", "--url", help="Solana RPC URL")
    save.add_argument("-a", "--address", required=True, help="Solana address")
    save.add_argument("-o", "--output-dir", type=Path, default=None, help="Directory for raw payloads")

    sol = commands.add_parser("sol-history", help="Print SOL transfer history")
    sol.add_argument("-u", "--url", help="Solana RPC URL")
    sol.add_argument("-a", "--address", required=True, help="Solana address")

    fungible = commands.add_parser("fungible-history", help="Print fungible token transfer history")
    fungible.add_argument("-u", "--url", help="Solana RPC URL")
    fungible.add_argument("-a", "--address", required=True, help="Solana address")
    fungible.add_argument("-m", "--mint", required=True, help="Mint address of the fungible token")

    send = commands.add_parser("send", help="Send SOL from one account to another")
    send.add_argument("-u", "--url", help="Solana RPC URL")
    send.add_argument("-k", "--keypair", type=Path, required=True, help="Sender's keypair file")
    send.add_argument("-r", "--recipient", required=True, help="Recipient's address")
    send.add_argument("-a", "--amount", required=True, help="Amount of SOL to send")

    send_tok = commands.add_parser("send-token", help="Send a fungible token to another owner")
    send_tok.add_argument("-u", "--url", help="Solana RPC URL")
    send_tok.add_argument("-k", "--keypair", type=Path, required=True, help="Sender's keypair file")
    send_tok.add_argument("-r", "--recipient", required=True, help="Recipient's wallet address")
    send_tok.add_argument("-m", "--mint", required=True, help="Mint address of the token")
    send_tok.add_argument("-a", "--amount", required=True, help="Amount in token units")

    gen = commands.add_parser("generate-keypair", help="Create a new Solana keypair file")
    gen.add_argument("-f", "--file", type=Path, required=True, help="File path to save the keypair")
    gen.add_argument("--force", action="store_true", help="Overwrite an existing file")

    inspect = commands.add_parser("inspect", help="Print the address of a keypair file")
    inspect.add_argument("-k", "--keypair", type=Path, required=True, help="Keypair file to inspect")
    return parser


def _rpc_config(config: AppConfig, url: Optional[str]) -> RPCConfig:
    if not url:
        return config.rpc
    return RPCConfig(
        endpoint=url,
        commitment=config.rpc.commitment,
        timeout=config.rpc.timeout,
        retries=config.rpc.retries,
    )


def _solana_client(rpc_config: RPCConfig) -> Client:
    return Client(rpc_config.endpoint, commitment=Commitment(rpc_config.commitment), timeout=rpc_config.timeout)


def run(args: argparse.Namespace, config: AppConfig) -> None:
    if args.command == "generate-keypair":
        keypair = generate_keypair(args.file, overwrite=args.force)
        print(f"New keypair generated and saved to {args.file}")
        print(f"Solana Address: {keypair.pubkey()}")
        return
    if args.command == "inspect":
        print(f"Solana Address: {load_keypair(args.keypair).pubkey()}")
        return

    rpc_config = _rpc_config(config, args.url)
    limit = args.limit if args.limit is not None else config.signature_limit

    if args.command == "save-history":
        fetcher = HistoryFetcher(SolanaRPCClient(rpc_config), limit=limit)
        output_dir = args.output_dir or Path(config.output_dir)
        written = fetcher.save_history(args.address, output_dir)
        print(f"Saved {len(written)} transactions to {output_dir}")
    elif args.command == "sol-history":
        logger.info("printing SOL history for %s via %s", args.address, rpc_config.endpoint)
        fetcher = HistoryFetcher(SolanaRPCClient(rpc_config), limit=limit)
        transfers = fetcher.native_history(args.address)
        print(render_table(native_rows(transfers), config.table_format))
    elif args.command == "fungible-history":
        logger.info("printing %s history for %s via %s", args.mint, args.address, rpc_config.endpoint)
        fetcher = HistoryFetcher(SolanaRPCClient(rpc_config), limit=limit)
        transfers = fetcher.fungible_history(args.address, args.mint)
        print(render_table(token_rows(transfers), config.table_format))
    elif args.command == "send":
        keypair = load_keypair(args.keypair)
        signature = send_sol(_solana_client(rpc_config), keypair, args.recipient, args.amount)
        print(f"Transaction sent successfully. Signature: {signature}")
    elif args.command == "send-token":
        keypair = load_keypair(args.keypair)
        signature = send_token(_solana_client(rpc_config), keypair, args.recipient, args.mint, args.amount)
        print(f"Transaction sent successfully. Signature: {signature}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = load_config(args.config)
    except ValueError as exc:
        setup_logging("ERROR").error("%s", exc)
        return 1
    setup_logging(args.log_level or config.log_level)

    try:
        run(args, config)
    except (SolanaRPCError, WalletError, ValueError, OSError) as exc:
        logger.error("%s failed: %s", args.command, exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
