"""shortlist: screen a batch of PDF applications from the terminal."""
import os

from .logging_config import setup_logging

__version__ = "0.1.0"

# Loggers under "shortlist.*" share one rich handler from the first import on;
# the CLI reconfigures it later from the loaded settings.
setup_logging(os.getenv("SHORTLIST_LOG_LEVEL", "INFO"))

__all__ = ["__version__", "setup_logging"]
