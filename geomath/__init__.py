"""
geomath - numeric, geometry and geospatial utilities
"""
import logging

__version__ = "1.0.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())


def configure_logging(level: int = logging.INFO) -> None:
    """Configure logging to print to console."""
    logging.basicConfig(
        level=level,  # Set the threshold level for logging (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
