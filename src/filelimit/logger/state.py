from __future__ import annotations

import logging
from typing import Optional

INITIALIZED: bool = False
CONSOLE_HANDLER: Optional[logging.Handler] = None
