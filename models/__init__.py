# models/__init__.py
from .base import Base, utc_now
from .contract_deployment import ContractDeployment
from .artist_tip import ArtistTip
from .album import Album
from .artist_upload import ArtistUpload
from .event import Event
from .merch_item import MerchItem
from .nft_collection import NFTCollection
from .nft_token import NFTToken

__all__ = [
     "Base",
     "utc_now",
     "ContractDeployment",
     "ArtistTip",
     "Album",
     "ArtistUpload",
     "Event",
     "MerchItem",
     "NFTCollection",
     "NFTToken",
]
