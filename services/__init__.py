# services/__init__.py
from .catalog_service import CatalogService
from .deployment_service import (
     deploy_contracts,
     list_deployments,
     record_deployment,
     resolve_contract_addresses,
     validate_deploy_request,
)
from .tip_service import TipService, tip_artist

__all__ = [
     "CatalogService",
     "deploy_contracts",
     "list_deployments",
     "record_deployment",
     "resolve_contract_addresses",
     "validate_deploy_request",
     "TipService",
     "tip_artist",
]
