# schemas/__init__.py
from .deployment import (
     ContractDeploymentResponse,
     ContractDeploymentListResponse,
     ContractAddressesResponse,
)
from .tip import (
     TipCreate,
     TipConfirmRequest,
     TipResponse,
     TipListResponse,
     ArtistEarningsResponse,
)

__all__ = [
     "ContractDeploymentResponse",
     "ContractDeploymentListResponse",
     "ContractAddressesResponse",
     "TipCreate",
     "TipConfirmRequest",
     "TipResponse",
     "TipListResponse",
     "ArtistEarningsResponse",
]
