"""Server entrypoint.

Starts the MCP server over stdio. The mode comes from the first argument
(``preview`` or ``console``, default ``preview``).

Usage:
    python -m targetwise.interface.mcp_console console
    # or via the script entrypoint:
    targetwise-mcp console
"""

from __future__ import annotations

import logging
import sys

from .mcp.server import create_server


def main(argv: list[str] | None = None) -> None:
    from .mcp.auth import check_scope

    args = sys.argv[1:] if argv is None else argv
    mode = args[0] if args else "preview"
    logging.basicConfig(level=logging.INFO, stream=sys.stderr)
    check_scope(mode)
    server = create_server(mode=mode)
    server.run(transport="stdio")


if __name__ == "__main__":
    main()
