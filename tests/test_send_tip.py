"""
Operator Tip Script Tests
Tests scripts/send_tip.py wiring without touching a network
"""

from decimal import Decimal
from unittest.mock import Mock, patch

from scripts import send_tip

ARGS = [
    "--user-id", "ops",
    "--artist-id", "51",
    "--artist-name", "Deadmau5",
    "--artist-wallet", "0x" + "1" * 40,
    "--amount", "0.02",
    "--yes",
]


def test_parse_args():
    args = send_tip.parse_args(ARGS)

    assert args.amount == Decimal("0.02")
    assert args.currency == "ETH"
    assert args.yes is True


def test_missing_key_exits_nonzero(monkeypatch):
    monkeypatch.delenv("TIP_SENDER_PRIVATE_KEY", raising=False)

    assert send_tip.send_tip(ARGS) == 1


def test_invalid_amount_exits_before_sending(monkeypatch):
    monkeypatch.setenv("TIP_SENDER_PRIVATE_KEY", "0x" + "11" * 32)
    w3 = Mock()
    w3.is_connected.return_value = True
    sender = Mock()
    sender.address = "0x" + "2" * 40

    with patch.object(send_tip, "get_web3", return_value=w3), \
            patch.object(send_tip, "EvmTipSender", return_value=sender), \
            patch.object(send_tip, "get_session_context") as session_context:
        session_context.return_value.__enter__.return_value = Mock()
        code = send_tip.send_tip(ARGS[:-3] + ["--amount", "0", "--yes"])

    assert code == 2
    sender.send.assert_not_called()
