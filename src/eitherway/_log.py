from __future__ import annotations

import logging

logger = logging.getLogger("eitherway")
logger.addHandler(logging.NullHandler())
