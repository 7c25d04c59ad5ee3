from __future__ import annotations
import logging
from typing import Any, Dict, List

from mcp.server.fastmcp import FastMCP

from .capability_base import CapabilityContext
from .lookup import build_lookup_table
from .models import CountTables
from .registry import CapabilityRegistry
from .report import render_report

logger = logging.getLogger(__name__)


class FlowTagMCPServer:
    """
    Format neutral MCP server.

    Responsibilities:
      Load configured capabilities
      Register capability tools
      Expose the format neutral lookup and report tools
    """

    def __init__(self, capability_imports: List[str]):
        self.registry = CapabilityRegistry()
        self.mcp = FastMCP("flowlog_tagger")

        self._load_capabilities(capability_imports)
        self._register_core_tools()

    def _log(self, msg: str) -> None:
        logger.info(msg)

    def _load_capabilities(self, imports: List[str]) -> None:
        self.registry.load_from_import_paths(imports)
        ctx = CapabilityContext(log=self._log)

        for name in self.registry.list():
            cap = self.registry.get(name)
            cap.register_tools(self.mcp, ctx)

    def _register_core_tools(self) -> None:
        @self.mcp.tool()
        def list_capabilities() -> List[str]:
            return self.registry.list()

        @self.mcp.tool()
        def capability_status(name: str) -> Dict[str, Any]:
            cap = self.registry.get(name)
            return cap.status()

        @self.mcp.tool()
        def all_capability_status() -> Dict[str, Dict[str, Any]]:
            return self.registry.statuses()

        @self.mcp.tool()
        def build_lookup(lookup_text: str, has_header: bool = False) -> Dict[str, str]:
            return build_lookup_table(lookup_text, has_header=has_header)

        @self.mcp.tool()
        def render_counts(tag_counts: Dict[str, int], port_protocol_counts: Dict[str, int]) -> str:
            return render_report(
                CountTables(tag_counts=tag_counts, port_protocol_counts=port_protocol_counts)
            )

    def run(self) -> None:
        self.mcp.run()
