"""Cheapest Thaumcraft research paths priced by the player's own aspects."""

import logging

__version__ = "0.1.0"

# Records go nowhere until configure_logging() attaches a file handler.
logging.getLogger(__name__).addHandler(logging.NullHandler())
