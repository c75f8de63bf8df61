"""Keypair files and simple SOL / SPL token transfers."""

from __future__ import annotations

import json
import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import List, Union

from solana.exceptions import SolanaRpcException
from solana.rpc.api import Client
from solana.rpc.core import RPCException, TransactionExpiredBlockheightExceededError, UnconfirmedTxError
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.message import Message
from solders.pubkey import Pubkey
from solders.system_program import TransferParams, transfer
from solders.transaction import Transaction
from spl.token.constants import TOKEN_PROGRAM_ID
from spl.token.instructions import (
    TransferCheckedParams,
    create_associated_token_account,
    get_associated_token_address,
    transfer_checked,
)

from .models import SOL_DECIMALS
from .rpc import SolanaRPCError

logger = logging.getLogger(__name__)

Amount = Union[str, float, int, Decimal]


class WalletError(ValueError):
    """Raised for unreadable keypairs, bad addresses and invalid amounts."""


def generate_keypair(path: Path, overwrite: bool = False) -> Keypair:
    if path.exists() and not overwrite:
        raise WalletError(f"refusing to overwrite existing keypair file {path}")
    keypair = Keypair()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(list(bytes(keypair))), encoding="utf-8")
    logger.info("wrote keypair %s to %s", keypair.pubkey(), path)
    return keypair


def load_keypair(path: Path) -> Keypair:
    """Read a Solana CLI JSON byte array or a base58 secret key."""
    try:
        raw = path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise WalletError(f"cannot read keypair file {path}: {exc}") from exc
    try:
        if raw.startswith("["):
            return Keypair.from_bytes(bytes(json.loads(raw)))
        return Keypair.from_base58_string(raw)
    except (ValueError, TypeError) as exc:
        raise WalletError(f"malformed keypair file {path}") from exc


def parse_pubkey(value: str) -> Pubkey:
    try:
        return Pubkey.from_string(value)
    except ValueError as exc:
        raise WalletError(f"invalid address: {value}") from exc


def to_base_units(amount: Amount, decimals: int) -> int:
    try:
        scaled = Decimal(str(amount)) * (Decimal(10) ** decimals)
    except InvalidOperation as exc:
        raise WalletError(f"invalid amount: {amount}") from exc
    if not scaled.is_finite():
        raise WalletError(f"amount must be a finite number: {amount}")
    if scaled <= 0:
        raise WalletError(f"amount must be positive: {amount}")
    if scaled != scaled.to_integral_value():
        raise WalletError(f"amount {amount} has more than {decimals} decimal places")
    return int(scaled)


def sol_to_lamports(amount: Amount) -> int:
    return to_base_units(amount, SOL_DECIMALS)


def _submit(client: Client, keypair: Keypair, instructions: List[Instruction]) -> str:
    try:
        blockhash = client.get_latest_blockhash().value.blockhash
        message = Message.new_with_blockhash(instructions, keypair.pubkey(), blockhash)
        transaction = Transaction([keypair], message, blockhash)
        signature = client.send_transaction(transaction).value
    except (RPCException, SolanaRpcException) as exc:
        raise SolanaRPCError("transaction submission failed", cause=exc) from exc
    try:
        client.confirm_transaction(signature)
    except (RPCException, SolanaRpcException, UnconfirmedTxError, TransactionExpiredBlockheightExceededError) as exc:
        raise SolanaRPCError(f"transaction {signature} was sent but not confirmed", cause=exc) from exc
    return str(signature)


def send_sol(client: Client, keypair: Keypair, recipient: str, amount: Amount) -> str:
    lamports = sol_to_lamports(amount)
    instruction = transfer(
        TransferParams(
            from_pubkey=keypair.pubkey(),
            to_pubkey=parse_pubkey(recipient),
            lamports=lamports,
        )
    )
    logger.info("sending %d lamports from %s to %s", lamports, keypair.pubkey(), recipient)
    return _submit(client, keypair, [instruction])


def token_decimals(client: Client, mint: Pubkey) -> int:
    try:
        return client.get_token_supply(mint).value.decimals
    except (RPCException, SolanaRpcException) as exc:
        raise SolanaRPCError(f"could not resolve decimals for mint {mint}", cause=exc) from exc


def send_token(client: Client, keypair: Keypair, recipient: str, mint: str, amount: Amount) -> str:
    """Send ``amount`` UI units of ``mint`` between associated token accounts.

    The recipient's associated token account is created in the same transaction
    when it does not exist yet; the sender pays the rent.
    """
    mint_key = parse_pubkey(mint)
    owner = keypair.pubkey()
    recipient_key = parse_pubkey(recipient)
    decimals = token_decimals(client, mint_key)
    raw_amount = to_base_units(amount, decimals)

    source = get_associated_token_address(owner, mint_key)
    dest = get_associated_token_address(recipient_key, mint_key)

    instructions: List[Instruction] = []
    try:
        dest_missing = client.get_account_info(dest).value is None
    except (RPCException, SolanaRpcException) as exc:
        raise SolanaRPCError(f"could not look up token account {dest}", cause=exc) from exc
    if dest_missing:
        logger.info("creating associated token account %s for %s", dest, recipient)
        instructions.append(create_associated_token_account(owner, recipient_key, mint_key))

    instructions.append(
        transfer_checked(
            TransferCheckedParams(
                program_id=TOKEN_PROGRAM_ID,
                source=source,
                mint=mint_key,
                dest=dest,
                owner=owner,
                amount=raw_amount,
                decimals=decimals,
            )
        )
    )
    logger.info("sending %s of %s from %s to %s", amount, mint, owner, recipient)
    return _submit(client, keypair, instructions)
