# medibridge/common/utils/logging_config.py
import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "info") -> None:
    """Configure root logging once for the backend process."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
