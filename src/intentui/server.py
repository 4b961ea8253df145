"""MCP server exposing the intention resolution engine.

Tools:
- resolve_intention: intention payload + constraint presets -> resolution
- describe_traits: behavior primitive catalog lookups
- list_affinity_rules: the active rule catalog
"""

import argparse
import logging
from typing import Any, Dict, List, Optional, Union

from fastmcp import FastMCP

from .config import ServerConfig, load_config
from .domains.resolution.adapters import ResolutionToolAdapter
from .domains.shared.kernel import ConstraintPreset

logger = logging.getLogger(__name__)

SERVER_INSTRUCTIONS = """\
Describe WHAT the user needs to decide, never which widget to show.
Call resolve_intention with an intention such as
{"action": "choose-one", "subject": {"type": "severity", "label": "Severity",
"constraints": {"options": [{"value": "low", "label": "Low"}]}}, "purpose": "request"}
and optional presets (mobile, screen-reader, high-urgency, compact, dark,
reduced-motion). The response names an abstract pattern, its behavior traits,
ARIA attributes and the reasoning behind the choice.
"""

_adapter: Optional[ResolutionToolAdapter] = None


def _get_adapter() -> ResolutionToolAdapter:
    """Create the tool adapter on first use, honouring default presets."""
    global _adapter
    if _adapter is None:
        config = load_config()
        _adapter = ResolutionToolAdapter(default_presets=config.default_presets)
    return _adapter


def _create_mcp_server(config: Optional[ServerConfig] = None) -> FastMCP:
    """Create and configure the FastMCP server with instructions.

    Returns:
        Configured FastMCP server instance.
    """
    if config is None:
        try:
            config = load_config()
        except ValueError as exc:
            logger.warning("Invalid server configuration, using defaults: %s", exc)
            config = ServerConfig()
    name = config.server_name
    return FastMCP(name, instructions=SERVER_INSTRUCTIONS)


# Initialize FastMCP server with instructions
mcp = _create_mcp_server()


@mcp.tool(
    name="resolve_intention",
    description=(
        "Resolve an abstract user intention into an interaction pattern for the "
        "given context. Accepts the intention as an object or a JSON string."
    ),
)
async def resolve_intention(
    intention: Union[Dict[str, Any], str],
    presets: Optional[List[ConstraintPreset]] = None,
    overrides: Optional[Dict[str, Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    """Resolve one intention.

    Args:
        intention: Intention payload (action, subject, purpose, optional flow)
        presets: Constraint presets applied over desktop defaults, in order
        overrides: Per-section field overrides, e.g. {"context": {"urgency": "high"}}
    """
    return _get_adapter().resolve_payload(intention, presets=presets, overrides=overrides)


@mcp.tool(
    name="describe_traits",
    description="Describe behavior traits. Omit traits to list the whole catalog.",
)
async def describe_traits(traits: Optional[List[str]] = None) -> Dict[str, Any]:
    return _get_adapter().describe_traits(traits)


@mcp.tool(
    name="list_affinity_rules",
    description="List the affinity rules used to pick interaction patterns.",
)
async def list_affinity_rules() -> Dict[str, Any]:
    return _get_adapter().list_rules()


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Intention resolution MCP server."
    )
    parser.add_argument(
        "--transport",
        dest="transport",
        choices=["stdio", "http", "sse"],
        help="Transport to use for the MCP server (default: stdio).",
    )
    parser.add_argument(
        "--host",
        dest="host",
        help="Host/interface for HTTP transport (default 127.0.0.1).",
    )
    parser.add_argument(
        "--port",
        dest="port",
        type=int,
        help="Port for HTTP transport (default 8000).",
    )
    parser.add_argument(
        "--path",
        dest="path",
        help="Path for HTTP/streamable endpoints (default '/').",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        help="Log level for the MCP server (e.g., INFO, DEBUG).",
    )
    return parser


def build_run_kwargs(config: ServerConfig) -> Dict[str, Any]:
    """Keyword arguments for ``mcp.run`` derived from the config."""
    run_kwargs: Dict[str, Any] = {"transport": config.transport}
    # Only pass host/port/path when using HTTP/SSE transports
    if config.transport != "stdio":
        run_kwargs["host"] = config.host
        run_kwargs["port"] = config.port
        if config.path:
            run_kwargs["path"] = config.path
    return run_kwargs


def main(argv: List[str] | None = None) -> None:
    """Start the intention resolution MCP server."""

    parser = _build_arg_parser()
    args = parser.parse_args(argv)

    config = load_config().with_overrides(
        transport=args.transport,
        host=args.host,
        port=args.port,
        path=args.path,
        log_level=args.log_level,
    )
    logging.basicConfig(level=config.numeric_log_level)

    logger.info(
        "Starting %s (transport=%s, default presets=%s)",
        config.server_name, config.transport, list(config.default_presets) or "none",
    )
    try:
        mcp.run(**build_run_kwargs(config))
    except KeyboardInterrupt:
        logger.info("Server interrupted by user")


if __name__ == "__main__":
    main()
