from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Protocol

from .protocols import PROTOCOL_NUMBERS, ProtocolNumber


@dataclass
class CapabilityContext:
    """
    Shared runtime objects provided by the core server to each capability.

    log
      Simple logging function, the server routes it to the package logger.

    protocol_numbers
      IANA protocol number table handed to flow log decoders. Swap it to
      change protocol name translation for every capability at once.
    """

    log: Callable[[str], None]
    protocol_numbers: Mapping[int, ProtocolNumber] = field(default_factory=lambda: PROTOCOL_NUMBERS)


class Capability(Protocol):
    """
    Required interface for a capability plugin.

    A capability is responsible for
    1. Registering MCP tools for one flow log format
    2. Decoding that format into FlowRecord dicts
    3. Handing the records to the protocol neutral aggregator

    The core server never imports specific capabilities directly.
    It loads them via registry using import paths.
    """

    name: str

    def register_tools(self, mcp: Any, ctx: CapabilityContext) -> None:
        """
        Called once at server startup. Capabilities should register tools here.
        """
        ...

    def status(self) -> Dict[str, Any]:
        """
        Return quick counters. Must be fast and side effect free.
        """
        ...
