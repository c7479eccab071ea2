import argparse
import logging
from typing import List, Optional

import uvicorn

from toolagents.agents import AGENTS
from toolagents.config import AgentConfig
from toolagents.server.app import configure_logging, create_app
from toolagents.server.app_core import ToolAgentApp

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="toolagents",
        description="Run a JSON-RPC tool agent over HTTP.",
    )
    parser.add_argument("agent", choices=sorted(AGENTS), help="Agent to serve")
    parser.add_argument("--host", help="Bind address (overrides environment)")
    parser.add_argument("--port", type=int, help="Listen port (overrides environment)")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    config = AgentConfig.from_env(args.agent).override(host=args.host, port=args.port)

    configure_logging(config.log_level)
    logger.info("[CLI] Starting %r", config)

    app = create_app(ToolAgentApp.create(config))
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
