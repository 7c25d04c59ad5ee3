"""
Core modules that must remain format neutral.

Keep flow log line parsing and exporter quirks out of this package.
"""

from .models import CountTables, FlowRecord, LookupEntry, LookupTable, join_key
from .protocols import PROTOCOL_NUMBERS, ProtocolNumber, translate_protocol
from .lookup import build_lookup_table, parse_lookup_line
from .aggregator import aggregate
from .report import render_report

__all__ = [
    "CountTables",
    "FlowRecord",
    "LookupEntry",
    "LookupTable",
    "join_key",
    "PROTOCOL_NUMBERS",
    "ProtocolNumber",
    "translate_protocol",
    "build_lookup_table",
    "parse_lookup_line",
    "aggregate",
    "render_report",
]
