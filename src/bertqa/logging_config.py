import logging


def configure_logging(level_name: str = "INFO") -> None:
    """Configure root logging once; leaves existing handlers alone."""
    level = getattr(logging, level_name.strip().upper(), logging.INFO)
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
        )
    logging.getLogger("bertqa").setLevel(level)
