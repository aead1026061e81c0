"""
Pydantic schemas for contract deployment records and address resolution.

The deploy endpoint itself takes a raw JSON body so that it can answer invalid
input with its own error envelope; see services.deployment_service.
"""
from datetime import datetime
from typing import List
from pydantic import BaseModel, ConfigDict, Field


class ContractDeploymentResponse(BaseModel):
     """A stored deployment receipt."""
     id: int
     contract_name: str
     contract_address: str
     transaction_hash: str
     block_number: int
     gas_used: int
     deployer_address: str
     network: str
     deployed_at: datetime

     model_config = ConfigDict(from_attributes=True)


class ContractDeploymentListResponse(BaseModel):
     deployments: List[ContractDeploymentResponse]
     total: int


class ContractAddressesResponse(BaseModel):
     """Current address per contract kind; zero address when never deployed."""
     network: str
     artistTipping: str = Field(..., description="ArtistTipping contract address")
     musicNFTFactory: str = Field(..., description="MusicNFTFactory contract address")
     eventTicketing: str = Field(..., description="EventTicketing contract address")

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "network": "base",
                    "artistTipping": "0x1234567890123456789012345678901234567890",
                    "musicNFTFactory": "0x0000000000000000000000000000000000000000",
                    "eventTicketing": "0x0000000000000000000000000000000000000000",
               }
          }
     )
