"""ledgercomm.log module."""

import logging

LOG: logging.Logger = logging.getLogger("symhwilib.ledgercomm")
