from __future__ import annotations
import os
import json
from flowlog_tagger.core.server import FlowTagMCPServer
from flowlog_tagger.logging_setup import setup_logging

DEFAULT_CAPABILITIES = ["flowlog_tagger.capabilities.vpc_flow_log.capability:build_capability"]


def main() -> None:
    """
    Load capabilities from FLOW_CAPABILITIES env var.

    Example:
      export FLOW_CAPABILITIES='[
        "flowlog_tagger.capabilities.vpc_flow_log.capability:build_capability"
      ]'
      python -m flowlog_tagger.cli.run_server

    Unset means the VPC flow log capability only.
    """
    setup_logging(os.environ.get("FLOWLOG_LOG_LEVEL", "INFO"))

    raw = os.environ.get("FLOW_CAPABILITIES")
    imports = json.loads(raw) if raw else DEFAULT_CAPABILITIES

    server = FlowTagMCPServer(capability_imports=imports)
    server.run()


if __name__ == "__main__":
    main()
