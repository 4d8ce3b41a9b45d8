"""Models module initialization - import all models here."""
from pixshare.models.album import Album, AlbumMember
from pixshare.models.image import Image

__all__ = ["Album", "AlbumMember", "Image"]
