# models/contract_deployment.py
"""
ContractDeployment model - stored receipt of a past contract deployment.

Rows are append-only: one per confirmed deployment transaction. The address
resolver reads them newest first to find the current address of each contract
on a network.
"""
from sqlalchemy import Column, Integer, BigInteger, String, DateTime, Index, func
from .base import Base


class ContractDeployment(Base):
     """Immutable deployment receipt. Never updated after insert."""
     __tablename__ = "contract_deployments"

     id = Column(Integer, primary_key=True, autoincrement=True)
     contract_name = Column(String(64), nullable=False, index=True)
     contract_address = Column(String(42), nullable=False)
     transaction_hash = Column(String(66), nullable=False, unique=True)
     block_number = Column(BigInteger, nullable=False)
     gas_used = Column(BigInteger, nullable=False)
     deployer_address = Column(String(42), nullable=False)
     network = Column(String(32), nullable=False, default="base")
     deployed_at = Column(DateTime, nullable=False)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     __table_args__ = (
          Index("ix_contract_deployments_network_deployed_at", "network", "deployed_at"),
     )

     def __repr__(self):
          return (
               f"<ContractDeployment(id={self.id}, name='{self.contract_name}', "
               f"address='{self.contract_address}', network='{self.network}')>"
          )
