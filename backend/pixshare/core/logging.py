"""
Logging setup and request logging middleware.
"""
import logging
import time

from fastapi import Request

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger("pixshare.requests")


def configure_logging(level: str = "INFO") -> None:
    """Install the root handler once; later calls only adjust the level."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger().setLevel(level.upper())


async def log_requests(request: Request, call_next):
    """Log every request with its status and processing time."""
    start_time = time.perf_counter()

    try:
        response = await call_next(request)
    except Exception:
        process_time = (time.perf_counter() - start_time) * 1000
        logger.error(
            "%s %s - unhandled error - %.2fms",
            request.method, request.url.path, process_time
        )
        raise

    process_time = (time.perf_counter() - start_time) * 1000
    logger.info(
        "%s %s - %s - %.2fms",
        request.method, request.url.path, response.status_code, process_time
    )
    return response
