# chain.py
"""
EVM chain access for the backend.

- ContractDeployer: builds, signs and submits contract-creation transactions
  from the server-held deployer key and waits for one confirmation.
- TransactionVerifier: reads transaction receipts to settle tips.
- EvmTipSender: native-currency transfers from a server-held wallet
  (used by scripts/send_tip.py).
- NonceManager: process-wide nonce allocation per sending account, shared
  by the deployer and the tip sender.
"""
import os
import threading
from typing import Dict, Optional, Sequence, Tuple

from dotenv import load_dotenv
from eth_abi import encode
from eth_account import Account
from loguru import logger
from web3 import Web3
from web3.exceptions import TransactionNotFound

load_dotenv()

BASE_RPC_URL = os.getenv("BASE_RPC_URL", "https://mainnet.base.org")
BASE_CHAIN_ID = int(os.getenv("BASE_CHAIN_ID", "8453"))
DEPLOY_GAS_LIMIT = int(os.getenv("DEPLOY_GAS_LIMIT", "3000000"))
DEPLOY_RECEIPT_TIMEOUT = int(os.getenv("DEPLOY_RECEIPT_TIMEOUT", "300"))
PRIORITY_FEE_GWEI = float(os.getenv("PRIORITY_FEE_GWEI", "0.01"))

NATIVE_TRANSFER_GAS = 21000
GAS_ESTIMATE_BUFFER = 1.2


class DeploymentError(Exception):
     """Raised when a contract cannot be deployed."""


class NonceManager:
     """
     Hands out sequential nonces for one sending account.

     Every deployer and tip sender built for the same account shares one
     manager, so requests running on different threads never sign with the
     same nonce. A nonce that was allocated but never reached the node is
     released and handed out again first.
     """

     def __init__(self, address: str):
          self.address = Web3.to_checksum_address(address)
          self.current_nonce: Optional[int] = None
          self.released = set()
          self.lock = threading.Lock()

     def _sync_nonce(self, w3: Web3) -> int:
          """Transaction count including the node's pending pool."""
          return int(w3.eth.get_transaction_count(self.address, "pending"))

     def get_nonce(self, w3: Web3) -> int:
          with self.lock:
               chain_nonce = self._sync_nonce(w3)
               self.released = {n for n in self.released if n >= chain_nonce}
               if self.released:
                    nonce = min(self.released)
                    self.released.discard(nonce)
               else:
                    if self.current_nonce is None or chain_nonce > self.current_nonce:
                         self.current_nonce = chain_nonce
                    nonce = self.current_nonce
                    self.current_nonce += 1

               logger.debug(f"Allocated nonce {nonce} for {self.address}")
               return nonce

     def release_nonce(self, nonce: int) -> None:
          """Return a nonce whose transaction was never broadcast."""
          with self.lock:
               if self.current_nonce == nonce + 1:
                    self.current_nonce = nonce
               else:
                    self.released.add(nonce)
               logger.warning(f"Released unused nonce {nonce} for {self.address}")


_nonce_managers: Dict[Tuple[int, str], NonceManager] = {}
_nonce_managers_lock = threading.Lock()


def get_nonce_manager(address: str, chain_id: int = BASE_CHAIN_ID) -> NonceManager:
     """Process-wide manager for (chain_id, address)."""
     key = (chain_id, Web3.to_checksum_address(address))
     with _nonce_managers_lock:
          if key not in _nonce_managers:
               _nonce_managers[key] = NonceManager(address)
          return _nonce_managers[key]


def reset_nonce_managers() -> None:
     with _nonce_managers_lock:
          _nonce_managers.clear()


def get_web3(rpc_url: Optional[str] = None) -> Web3:
     return Web3(Web3.HTTPProvider(rpc_url or BASE_RPC_URL))


def get_fee_params(w3: Web3, priority_fee_gwei: float = PRIORITY_FEE_GWEI) -> Dict[str, int]:
     """
     Current network fee fields for a transaction.

     EIP-1559 chains get maxFeePerGas = 2 * baseFee + tip; chains without a
     base fee fall back to the legacy gasPrice.
     """
     latest_block = w3.eth.get_block("latest")
     base_fee_wei = latest_block.get("baseFeePerGas")

     if base_fee_wei is None:
          return {"gasPrice": int(w3.eth.gas_price)}

     try:
          priority_fee_wei = int(w3.eth.max_priority_fee)
     except Exception as e:
          logger.warning(f"eth_maxPriorityFeePerGas unavailable ({e}), using configured tip")
          priority_fee_wei = int(w3.to_wei(priority_fee_gwei, "gwei"))

     return {
          "maxFeePerGas": int(base_fee_wei) * 2 + priority_fee_wei,
          "maxPriorityFeePerGas": priority_fee_wei,
          "type": 2,
     }


class ContractDeployer:
     """
     Deploys contract bytecode from the server-held deployer account.

     Each call to deploy() sends one contract-creation transaction and blocks
     until its receipt is available.
     """

     def __init__(
          self,
          w3: Web3,
          private_key: str,
          chain_id: int = BASE_CHAIN_ID,
          gas_limit: int = DEPLOY_GAS_LIMIT,
          receipt_timeout: int = DEPLOY_RECEIPT_TIMEOUT,
     ):
          if not private_key:
               raise DeploymentError("DEPLOYER_PRIVATE_KEY is not set")
          self.w3 = w3
          self.account = Account.from_key(private_key)
          self.chain_id = chain_id
          self.gas_limit = gas_limit
          self.receipt_timeout = receipt_timeout
          self.nonce_manager = get_nonce_manager(self.account.address, chain_id)

     @classmethod
     def from_env(cls) -> "ContractDeployer":
          """Build a deployer from BASE_RPC_URL / DEPLOYER_PRIVATE_KEY."""
          return cls(get_web3(), os.getenv("DEPLOYER_PRIVATE_KEY", ""))

     @property
     def address(self) -> str:
          return self.account.address

     def build_deploy_data(
          self,
          bytecode: str,
          constructor_types: Sequence[str] = (),
          constructor_args: Sequence = (),
     ) -> str:
          """Creation bytecode followed by the ABI-encoded constructor arguments."""
          if not bytecode.startswith("0x"):
               bytecode = "0x" + bytecode
          if not constructor_types:
               return bytecode
          args = [
               Web3.to_checksum_address(arg) if abi_type == "address" else arg
               for abi_type, arg in zip(constructor_types, constructor_args)
          ]
          return bytecode + encode(list(constructor_types), args).hex()

     def _gas_for(self, tx: Dict) -> int:
          try:
               estimate = self.w3.eth.estimate_gas(tx)
               return min(int(estimate * GAS_ESTIMATE_BUFFER), self.gas_limit)
          except Exception as e:
               logger.warning(f"Gas estimation failed: {e}, using ceiling {self.gas_limit}")
               return self.gas_limit

     def deploy(
          self,
          contract_name: str,
          bytecode: str,
          constructor_types: Sequence[str] = (),
          constructor_args: Sequence = (),
     ) -> Dict:
          """
          Deploy one contract and wait for one confirmation.

          Returns:
               dict with contract_address, transaction_hash, block_number, gas_used

          Raises:
               DeploymentError: if the transaction reverts
          """
          data = self.build_deploy_data(bytecode, constructor_types, constructor_args)

          nonce = self.nonce_manager.get_nonce(self.w3)
          try:
               tx = {
                    "from": self.account.address,
                    "nonce": nonce,
                    "data": data,
                    "value": 0,
                    "chainId": self.chain_id,
               }
               tx.update(get_fee_params(self.w3))
               tx["gas"] = self._gas_for(tx)

               logger.info(f"Deploying {contract_name} from {self.account.address} (nonce {nonce}, gas limit {tx['gas']})")

               signed_tx = self.account.sign_transaction(tx)
               tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
          except Exception:
               self.nonce_manager.release_nonce(nonce)
               raise

          tx_hash_hex = Web3.to_hex(tx_hash)
          logger.info(f"{contract_name} transaction sent: {tx_hash_hex}, waiting for confirmation")

          receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.receipt_timeout)

          if receipt["status"] != 1:
               raise DeploymentError(f"{contract_name} deployment reverted (tx {tx_hash_hex})")

          return {
               "contract_address": receipt["contractAddress"],
               "transaction_hash": tx_hash_hex,
               "block_number": int(receipt["blockNumber"]),
               "gas_used": int(receipt["gasUsed"]),
          }


class TransactionVerifier:
     """Looks up receipts to tell whether a submitted transaction landed."""

     CONFIRMED = "confirmed"
     FAILED = "failed"
     PENDING = "pending"

     def __init__(self, w3: Web3):
          self.w3 = w3

     @classmethod
     def from_env(cls) -> "TransactionVerifier":
          return cls(get_web3())

     def get_status(self, tx_hash: str) -> str:
          """
          Returns "confirmed" (receipt status 1), "failed" (status 0) or
          "pending" (no receipt yet).
          """
          try:
               receipt = self.w3.eth.get_transaction_receipt(tx_hash)
          except TransactionNotFound:
               return self.PENDING

          if receipt is None:
               return self.PENDING
          return self.CONFIRMED if receipt["status"] == 1 else self.FAILED


class EvmTipSender:
     """Sends native-currency tips from a server-held wallet."""

     def __init__(self, w3: Web3, private_key: str, chain_id: int = BASE_CHAIN_ID):
          if not private_key:
               raise ValueError("TIP_SENDER_PRIVATE_KEY is not set")
          self.w3 = w3
          self.account = Account.from_key(private_key)
          self.chain_id = chain_id
          self.nonce_manager = get_nonce_manager(self.account.address, chain_id)

     @property
     def address(self) -> str:
          return self.account.address

     def send(self, to_address: str, amount_ether) -> str:
          """Transfer amount_ether to to_address; returns the transaction hash."""
          nonce = self.nonce_manager.get_nonce(self.w3)
          try:
               tx = {
                    "from": self.account.address,
                    "to": Web3.to_checksum_address(to_address),
                    "value": self.w3.to_wei(amount_ether, "ether"),
                    "nonce": nonce,
                    "gas": NATIVE_TRANSFER_GAS,
                    "chainId": self.chain_id,
               }
               tx.update(get_fee_params(self.w3))

               signed_tx = self.account.sign_transaction(tx)
               tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
          except Exception:
               self.nonce_manager.release_nonce(nonce)
               raise

          tx_hash_hex = Web3.to_hex(tx_hash)
          logger.info(f"Tip transfer sent to {to_address}: {tx_hash_hex}")
          return tx_hash_hex
