"""
MCP Tool Definitions and Handlers for the Recency Cache
Copyright 2025 Jurden Bruce

All tool responses return JSON for AI consumption, not human-formatted text.
"""

import asyncio
import json
import logging
from typing import Any, Dict, List

from mcp.types import Tool, TextContent
from pydantic import BaseModel, Field

from .factorisers import CachedFactoriser

logger = logging.getLogger("recency-cache.mcp-tools")

# Trial division runs to completion in its worker thread; at most 10**6 divisors per call
MAX_FACTORISE_NUMBER = 10**12


class FactoriseRequest(BaseModel):
    number: int = Field(..., ge=1, le=MAX_FACTORISE_NUMBER, description="Positive integer to factorise")


class ListCachedNumbersRequest(BaseModel):
    limit: int = Field(default=20, ge=1, le=1000, description="Max numbers to list")


def get_tool_definitions() -> List[Tool]:
    """Return list of available MCP tools"""
    return [
        Tool(
            name="factorise",
            description=f"Return the prime factors of a positive integer up to {MAX_FACTORISE_NUMBER}. Results are served from an LRU cache when the number was factorised recently.",
            inputSchema={
                "type": "object",
                "properties": {
                    "number": {"type": "integer", "minimum": 1, "maximum": MAX_FACTORISE_NUMBER, "description": "Number to factorise"},
                },
                "required": ["number"],
            },
        ),
        Tool(
            name="get_cache_stats",
            description="Get cache capacity, current size and hit/miss counters.",
            inputSchema={"type": "object", "properties": {}},
        ),
        Tool(
            name="list_cached_numbers",
            description="List cached numbers from most to least recently used. Does not affect eviction order or statistics.",
            inputSchema={
                "type": "object",
                "properties": {
                    "limit": {"type": "integer", "minimum": 1, "maximum": 1000, "default": 20, "description": "Max numbers to list"},
                },
            },
        ),
    ]


def _json_response(payload: Dict[str, Any]) -> List[TextContent]:
    return [TextContent(type="text", text=json.dumps(payload, indent=2))]


async def handle_tool_call(name: str, arguments: Dict[str, Any], factoriser: CachedFactoriser) -> List[TextContent]:
    """
    Handle MCP tool calls with JSON responses

    Args:
        name: Tool name
        arguments: Tool arguments
        factoriser: CachedFactoriser shared by all calls

    Returns:
        List of TextContent with JSON-encoded responses
    """
    arguments = arguments or {}

    try:
        if name == "factorise":
            request = FactoriseRequest(**arguments)
            factors, was_cached = await asyncio.to_thread(factoriser.factorise_with_status, request.number)
            return _json_response({
                "number": request.number,
                "factors": list(factors),
                "cached": was_cached,
            })

        elif name == "get_cache_stats":
            cache = factoriser.cache
            return _json_response({
                "capacity": cache.capacity,
                "size": cache.size(),
                **factoriser.stats().to_dict(),
            })

        elif name == "list_cached_numbers":
            request = ListCachedNumbersRequest(**arguments)
            numbers = list(factoriser.cache.keys())
            return _json_response({
                "numbers": numbers[:request.limit],
                "total": len(numbers),
            })

        else:
            return _json_response({"error": f"Unknown tool: {name}"})

    except Exception as e:
        logger.error(f"Tool execution error: {name}: {e}", exc_info=True)
        return _json_response({
            "error": str(e),
            "tool": name,
            "type": type(e).__name__,
        })
