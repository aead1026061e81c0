"""
Server Wallet Tip Script
Sends an ETH tip on Base from the operator wallet and records it

Usage: python -m scripts.send_tip --user-id ... --artist-id ... --amount 0.01
"""

import argparse
import os
import sys
from decimal import Decimal

from dotenv import load_dotenv
from loguru import logger
from pydantic import ValidationError

from chain import EvmTipSender, TransactionVerifier, get_web3
from database import get_session_context
from services.tip_service import tip_artist

load_dotenv()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Tip an artist from the operator wallet")
    parser.add_argument("--user-id", required=True, help="User the tip is recorded for")
    parser.add_argument("--artist-id", required=True)
    parser.add_argument("--artist-name", required=True)
    parser.add_argument("--artist-wallet", required=True, help="Recipient EVM address")
    parser.add_argument("--amount", required=True, type=Decimal, help="Amount in ETH")
    parser.add_argument("--currency", default="ETH", choices=["ETH", "BASE"])
    parser.add_argument("--message", default=None)
    parser.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")
    return parser.parse_args(argv)


def send_tip(argv=None) -> int:
    """Send one tip; returns a process exit code"""

    args = parse_args(argv)

    private_key = os.getenv("TIP_SENDER_PRIVATE_KEY")
    if not private_key:
        logger.error("TIP_SENDER_PRIVATE_KEY must be set")
        return 1

    w3 = get_web3()
    if not w3.is_connected():
        logger.error("Failed to connect to network")
        return 1

    sender = EvmTipSender(w3, private_key)
    logger.info(f"Sending from: {sender.address}")

    if not args.yes:
        confirm = input(f"\nSend {args.amount} {args.currency} to {args.artist_wallet}? (yes/no): ")
        if confirm.lower() != "yes":
            logger.info("Tip cancelled")
            return 0

    request = {
        "artist_id": args.artist_id,
        "artist_name": args.artist_name,
        "amount": args.amount,
        "currency": args.currency,
        "message": args.message,
        "wallet_address": sender.address,
        "artist_wallet_address": args.artist_wallet,
        "network": "base",
    }

    try:
        with get_session_context() as db:
            tip = tip_artist(db, args.user_id, request, sender, verifier=TransactionVerifier(w3))
            logger.info(f"Tip {tip.id} is {tip.status.value}: {tip.transaction_hash}")
    except (ValidationError, ValueError) as e:
        logger.error(f"Invalid tip: {e}")
        return 2
    except Exception as e:
        logger.error(f"Tip failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(send_tip())
