import logging

from pixshare.core.config import Settings, settings as default_settings
from pixshare.services.storage_interface import StorageInterface
from pixshare.services.storage_providers.s3_service import S3Service

logger = logging.getLogger(__name__)

_PROVIDERS = {
    "s3": S3Service,
}


def create_storage_service(settings: Settings = None) -> StorageInterface:
    """
    Build the media gateway named by ``STORAGE_PROVIDER``.
    Called once from the application lifespan.
    """
    settings = settings or default_settings
    provider = settings.STORAGE_PROVIDER.lower()

    factory = _PROVIDERS.get(provider)
    if factory is None:
        raise ValueError(
            f"Unknown storage provider '{provider}'. Available: {', '.join(sorted(_PROVIDERS))}"
        )

    logger.info(f"Initializing storage provider: {provider}")
    return factory(settings)
