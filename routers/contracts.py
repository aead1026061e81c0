# routers/contracts.py
"""
Contract deployment API.

POST /deploy-contracts: deploy platform contracts from the server-held key.
GET /api/contracts/addresses: current address per contract for a network.
GET /api/contracts/deployments: stored deployment receipts.
"""
import os
from typing import Any, Callable, Optional, Tuple

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_deployer_factory
from schemas.deployment import (
     ContractAddressesResponse,
     ContractDeploymentListResponse,
     ContractDeploymentResponse,
)
from services.deployment_service import (
     DEFAULT_NETWORK,
     deploy_contracts,
     list_deployments,
     resolve_contract_addresses,
     validate_deploy_request,
)

DEPLOY_NETWORK = os.getenv("DEPLOY_NETWORK", DEFAULT_NETWORK)

router = APIRouter(tags=["contracts"])


async def read_json_body(request: Request) -> Tuple[Any, Optional[str]]:
     """Parsed JSON body (None when empty) and the parse error, if any."""
     if not await request.body():
          return None, None
     try:
          return await request.json(), None
     except ValueError as e:
          return None, f"Invalid JSON body: {e}"


@router.post("/deploy-contracts", summary="Deploy platform contracts")
def deploy_contracts_endpoint(
     body: Tuple[Any, Optional[str]] = Depends(read_json_body),
     db: Session = Depends(get_session),
     deployer_factory: Callable = Depends(get_deployer_factory),
):
     """
     Deploy the requested contracts in order and record each deployment.

     - **contracts**: names from ArtistTipping, MusicNFTFactory, EventTicketing
     - **deployerAddress**: fee recipient passed to each constructor

     Invalid input is rejected with 400 before any chain call. Any failure
     while deploying returns 500; deployments that already landed are not
     reported in the response.
     """
     payload, body_error = body
     if body_error:
          logger.error(f"Error in deploy-contracts: {body_error}")
          return JSONResponse(
               status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
               content={"success": False, "error": body_error},
          )

     errors = validate_deploy_request(payload)
     if errors:
          return JSONResponse(
               status_code=status.HTTP_400_BAD_REQUEST,
               content={"success": False, "error": "Invalid input: " + ", ".join(errors)},
          )

     contracts = payload["contracts"]
     deployer_address = payload["deployerAddress"]
     logger.info(f"Deploying contracts for address: {deployer_address}")
     logger.info(f"Contracts to deploy: {contracts}")

     try:
          deployer = deployer_factory()
          deployments = deploy_contracts(
               db,
               deployer,
               contracts,
               deployer_address,
               network=DEPLOY_NETWORK,
          )
     except Exception as e:
          logger.error(f"Error in deploy-contracts: {e}")
          return JSONResponse(
               status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
               content={"success": False, "error": str(e) or "Unknown error occurred"},
          )

     return {
          "success": True,
          "deployments": deployments,
          "message": "Contracts deployed successfully",
     }


@router.get(
     "/api/contracts/addresses",
     response_model=ContractAddressesResponse,
     summary="Current contract addresses"
)
def get_contract_addresses(
     network: str = Query(DEPLOY_NETWORK, description="Network to resolve"),
     db: Session = Depends(get_session),
):
     """Latest deployed address per contract; zero address if never deployed."""
     addresses = resolve_contract_addresses(db, network=network)
     return ContractAddressesResponse(network=network, **addresses)


@router.get(
     "/api/contracts/deployments",
     response_model=ContractDeploymentListResponse,
     summary="List deployment records"
)
def get_contract_deployments(
     network: Optional[str] = Query(None, description="Filter by network"),
     contract_name: Optional[str] = Query(None, description="Filter by contract name"),
     db: Session = Depends(get_session),
):
     records = list_deployments(db, network=network, contract_name=contract_name)
     return ContractDeploymentListResponse(
          deployments=[ContractDeploymentResponse.model_validate(r) for r in records],
          total=len(records),
     )
