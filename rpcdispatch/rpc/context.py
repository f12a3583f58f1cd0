# rpcdispatch/rpc/context.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

__all__ = ["MessageContext"]



@dataclass(slots=True, frozen=True)
class MessageContext:
    """
    Transport-derived metadata about an incoming message. The dispatcher hands
    it to handlers as-is and never inspects it.
    """
    clientHostName: str | None = None
    clientInetAddress: str | None = None
    secure: bool = False
    principal: Any | None = None # Authenticated identity, if the transport has one
