# dependencies.py
"""
Shared FastAPI dependencies: bearer-token auth, chain clients and record
ownership checks.
"""
import os
from typing import Callable, Optional

from dotenv import load_dotenv
from fastapi import HTTPException, Request, status
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from chain import ContractDeployer, TransactionVerifier

load_dotenv()
SECRET_KEY = os.getenv("JWT_SECRET")
ALGORITHM = "HS256"


def _decode_bearer(request: Request) -> Optional[dict]:
     auth = request.headers.get("Authorization")
     if not auth or not auth.startswith("Bearer "):
          return None
     token = auth.split(" ")[1]
     try:
          return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
     except JWTError:
          raise HTTPException(status_code=403, detail="Invalid token")


# Token Auth Dependency
def verify_token(request: Request) -> dict:
     payload = _decode_bearer(request)
     if payload is None:
          raise HTTPException(status_code=401, detail="Missing token")
     if not payload.get("id"):
          raise HTTPException(status_code=403, detail="Invalid token")
     return payload


def optional_token(request: Request) -> Optional[dict]:
     """Like verify_token, but anonymous requests get None."""
     return _decode_bearer(request)


def current_user_id(token: Optional[dict]) -> Optional[str]:
     if not token or token.get("id") is None:
          return None
     return str(token["id"])


def get_deployer_factory() -> Callable[[], ContractDeployer]:
     """
     Returns a factory rather than a deployer so that the chain client is only
     built after the request has been validated.
     """
     return ContractDeployer.from_env


def get_transaction_verifier() -> TransactionVerifier:
     return TransactionVerifier.from_env()


def get_owned_or_404(db: Session, model, record_id: int, token: dict, label: str):
     """
     Load a record and make sure the caller owns it (artist_id == token id).

     Raises:
          HTTPException 404 if missing, 403 if owned by someone else
     """
     record = db.query(model).filter(model.id == record_id).first()
     if record is None:
          raise HTTPException(
               status_code=status.HTTP_404_NOT_FOUND,
               detail=f"{label} with ID {record_id} not found"
          )
     if record.artist_id != current_user_id(token):
          raise HTTPException(
               status_code=status.HTTP_403_FORBIDDEN,
               detail=f"You do not have permission to modify this {label.lower()}"
          )
     return record


def get_visible_or_404(db: Session, model, record_id: int, token: Optional[dict], label: str, public_statuses):
     """
     Load a record for reading. Owners see every status; everyone else only
     sees records whose status is in public_statuses.

     Raises:
          HTTPException 404 if missing or hidden from the caller
     """
     record = db.query(model).filter(model.id == record_id).first()
     if record is None or (
          record.artist_id != current_user_id(token) and record.status not in public_statuses
     ):
          raise HTTPException(
               status_code=status.HTTP_404_NOT_FOUND,
               detail=f"{label} with ID {record_id} not found"
          )
     return record
