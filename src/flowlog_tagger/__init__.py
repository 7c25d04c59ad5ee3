"""
flowlog_tagger

Tag VPC flow log records from a port/protocol lookup table and count them.

Core ideas
1. Capabilities decode a flow log format into FlowRecord dicts
2. The lookup table maps "dstport,protocol" join keys to tags
3. The aggregator counts records per tag and per port/protocol pair
"""

__all__ = ["core", "capabilities", "cli"]
