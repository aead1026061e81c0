# routers/__init__.py
from . import albums, contracts, discovery, events, merchandise, nft, tips, uploads

__all__ = [
     "albums",
     "contracts",
     "discovery",
     "events",
     "merchandise",
     "nft",
     "tips",
     "uploads",
]
