from __future__ import annotations

import asyncio

from mcp.server.fastmcp import FastMCP

from basecamp_connector.core.config import create_client_from_env, load_env_config
from basecamp_connector.core.logging import setup_logging
from basecamp_connector.core.registry import register_connector_tools


async def main() -> None:
    settings = load_env_config(use_dotenv=True)
    setup_logging(settings.log_level)
    client = create_client_from_env()

    app = FastMCP("basecamp-connector")
    register_connector_tools(app, lambda: client)

    try:
        await app.run_stdio_async()
    finally:
        await client.aclose()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
