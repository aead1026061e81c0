# services/contract_bytecode.py
"""
Creation bytecode for the platform contracts.

Compiled hardhat artifacts under CONTRACT_ARTIFACTS_DIR take precedence
(<dir>/<Name>.sol/<Name>.json). Without them the embedded bytecode is used.

The embedded bytecode is a PLACEHOLDER, not the production contracts: each
one deploys a stub whose runtime code returns a fixed word and ignores the
constructor arguments appended to it.
"""
import json
import os
from typing import Dict, Optional, Tuple

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

CONTRACT_ARTIFACTS_DIR = os.getenv("CONTRACT_ARTIFACTS_DIR", "artifacts/contracts")

# init code: CODECOPY 10 bytes of runtime from offset 12 and RETURN them
_STUB_INIT = "600a600c600039600a6000f3"

EMBEDDED_BYTECODE: Dict[str, str] = {
     "ArtistTipping": "0x" + _STUB_INIT + "602a60005260206000f3",
     "MusicNFTFactory": "0x" + _STUB_INIT + "602b60005260206000f3",
     "EventTicketing": "0x" + _STUB_INIT + "602c60005260206000f3",
}

# Every platform contract takes its fee recipient as the only constructor argument.
CONSTRUCTOR_TYPES: Dict[str, Tuple[str, ...]] = {
     "ArtistTipping": ("address",),
     "MusicNFTFactory": ("address",),
     "EventTicketing": ("address",),
}


def _artifact_path(contract_name: str, artifacts_dir: str) -> str:
     return os.path.join(artifacts_dir, f"{contract_name}.sol", f"{contract_name}.json")


def load_bytecode(contract_name: str, artifacts_dir: Optional[str] = None) -> Optional[str]:
     """
     Creation bytecode for contract_name, or None if there is none.

     A compiled artifact wins over the embedded placeholder.
     """
     path = _artifact_path(contract_name, artifacts_dir or CONTRACT_ARTIFACTS_DIR)
     if os.path.exists(path):
          with open(path, "r") as f:
               artifact = json.load(f)
          bytecode = artifact.get("bytecode")
          if bytecode and bytecode != "0x":
               logger.debug(f"Using compiled artifact for {contract_name}: {path}")
               return bytecode
          logger.warning(f"Artifact {path} has no bytecode, falling back to embedded")

     return EMBEDDED_BYTECODE.get(contract_name)


def constructor_types_for(contract_name: str) -> Tuple[str, ...]:
     return CONSTRUCTOR_TYPES.get(contract_name, ())
