"""In-process serialization points for registry mutations."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field


@dataclass(slots=True)
class RegistryLocks:
    """Locks held from the first invariant read until the commit.

    ``registration`` guards the capacity check for register/remove and
    ``checkout`` guards the holder scan and availability check for
    checkout/check-in.
    """

    registration: asyncio.Lock = field(default_factory=asyncio.Lock)
    checkout: asyncio.Lock = field(default_factory=asyncio.Lock)
