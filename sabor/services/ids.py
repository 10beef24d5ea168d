"""Identifier generation for stored entities."""

import time
import uuid


def new_id(prefix: str) -> str:
    """``{prefix}_{epoch millis}_{9 random hex chars}``, e.g. ``order_1718..._3f9a0c1b2``."""
    return f"{prefix}_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"
