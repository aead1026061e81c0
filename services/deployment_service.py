# services/deployment_service.py
"""
Contract Deployment Service - deploys the platform contracts and keeps the
append-only record of where they live.

Deployment of a request:
1. Validate input (contract list, deployer address, allow-listed names)
2. For each requested contract, in request order:
   a. Look up creation bytecode (fails the whole request if missing)
   b. Build, sign and submit the creation transaction; wait for one confirmation
   c. Record {address, tx hash, block number, gas used}
3. Return the list of deployments

There is no idempotency key: deploying the same list twice creates two
contracts and two records.
"""
import re
from datetime import datetime
from typing import Any, Dict, List, Optional

from loguru import logger
from sqlalchemy import desc
from sqlalchemy.orm import Session

from chain import DeploymentError
from models import ContractDeployment, utc_now
from services.contract_bytecode import load_bytecode, constructor_types_for


ALLOWED_CONTRACTS = ("ArtistTipping", "MusicNFTFactory", "EventTicketing")
DEFAULT_NETWORK = "base"
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

ADDRESS_PATTERN = re.compile(r"^0x[a-fA-F0-9]{40}$")

# contract name -> key used by the address resolver response
ADDRESS_KEYS = {
     "ArtistTipping": "artistTipping",
     "MusicNFTFactory": "musicNFTFactory",
     "EventTicketing": "eventTicketing",
}


def is_valid_address(value: Any) -> bool:
     return isinstance(value, str) and ADDRESS_PATTERN.match(value) is not None


def validate_deploy_request(data: Any) -> List[str]:
     """
     Validate a deployment request body.

     Returns:
          List of error messages; empty if the request is valid.
     """
     if not isinstance(data, dict):
          return ["Invalid request body"]

     errors = []
     contracts = data.get("contracts")

     if not (
          isinstance(contracts, list)
          and len(contracts) > 0
          and all(isinstance(c, str) for c in contracts)
     ):
          errors.append("Invalid contracts array")

     if not is_valid_address(data.get("deployerAddress")):
          errors.append("Invalid deployer address format")

     if isinstance(contracts, list):
          invalid = [str(c) for c in contracts if c not in ALLOWED_CONTRACTS]
          if invalid:
               errors.append(f"Invalid contract names: {', '.join(invalid)}")

     return errors


def record_deployment(
     db: Session,
     contract_name: str,
     contract_address: str,
     transaction_hash: str,
     block_number: int,
     gas_used: int,
     deployer_address: str,
     network: str = DEFAULT_NETWORK,
     deployed_at: Optional[datetime] = None,
) -> ContractDeployment:
     """Append a deployment record. Records are never updated afterwards."""
     entry = ContractDeployment(
          contract_name=contract_name,
          contract_address=contract_address,
          transaction_hash=transaction_hash,
          block_number=block_number,
          gas_used=gas_used,
          deployer_address=deployer_address,
          network=network,
          deployed_at=deployed_at or utc_now(),
     )
     db.add(entry)
     db.flush()
     return entry


def deploy_contracts(
     db: Session,
     deployer,
     contracts: List[str],
     deployer_address: str,
     network: str = DEFAULT_NETWORK,
) -> List[Dict]:
     """
     Deploy each requested contract in order and record the results.

     Every confirmed deployment is committed as soon as it lands, so a failure
     on a later contract does not lose the record of the earlier ones. A record
     that cannot be stored is logged and skipped; the deployment itself still
     counts.

     Raises:
          DeploymentError: if bytecode is missing or a transaction reverts
     """
     deployments = []

     for contract_name in dict.fromkeys(contracts):
          bytecode = load_bytecode(contract_name)
          if not bytecode:
               raise DeploymentError(f"No bytecode available for {contract_name}")

          result = deployer.deploy(
               contract_name,
               bytecode,
               constructor_types=constructor_types_for(contract_name),
               constructor_args=[deployer_address],  # feeRecipient
          )
          deployments.append({
               "name": contract_name,
               "contractAddress": result["contract_address"],
               "transactionHash": result["transaction_hash"],
               "blockNumber": result["block_number"],
               "gasUsed": result["gas_used"],
          })
          logger.info(f"{contract_name} deployed: {result['contract_address']}")

          try:
               record_deployment(
                    db,
                    contract_name=contract_name,
                    contract_address=result["contract_address"],
                    transaction_hash=result["transaction_hash"],
                    block_number=result["block_number"],
                    gas_used=result["gas_used"],
                    deployer_address=deployer_address,
                    network=network,
               )
               db.commit()
          except Exception as e:
               db.rollback()
               logger.error(f"Error storing deployment info for {contract_name}: {e}")

     return deployments


def list_deployments(
     db: Session,
     network: Optional[str] = None,
     contract_name: Optional[str] = None,
) -> List[ContractDeployment]:
     """Deployment records, newest first."""
     query = db.query(ContractDeployment)
     if network:
          query = query.filter(ContractDeployment.network == network)
     if contract_name:
          query = query.filter(ContractDeployment.contract_name == contract_name)
     return query.order_by(desc(ContractDeployment.deployed_at), desc(ContractDeployment.id)).all()


def resolve_contract_addresses(db: Session, network: str = DEFAULT_NETWORK) -> Dict[str, str]:
     """
     Current address of each platform contract on a network.

     The newest record per contract name wins (ties on deployed_at go to the
     last inserted row); contracts never deployed resolve to the zero address.
     """
     addresses: Dict[str, str] = {}
     for deployment in list_deployments(db, network=network):
          key = ADDRESS_KEYS.get(deployment.contract_name)
          if key and key not in addresses:
               addresses[key] = deployment.contract_address

     return {key: addresses.get(key, ZERO_ADDRESS) for key in ADDRESS_KEYS.values()}
