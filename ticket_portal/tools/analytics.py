"""
tools/analytics.py — MCP tool for ticket analytics
==================================================
  - getTicketAnalytics : per-period, per-platform ticket counts in a window

Periods are "Y-M-D" keys in first-seen order. Callers that chart them
should sort chronologically (see client.sorted_periods).
"""

from mcp import types

from ticket_portal.schema import AnalyticsRequest, Granularity
from ticket_portal.store import PortalStore
from ticket_portal.tools.common import dump, enum_schema, parse_arguments, respond, timestamp_schema

get_ticket_analytics_tool = types.Tool(
    name="getTicketAnalytics",
    description=(
        "Count tickets submitted between startTime and endTime (inclusive, nanoseconds), "
        "grouped by period and platform. Always returns at least one period. "
        "Week and month granularity currently produce daily periods."
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "startTime": timestamp_schema("Window start, inclusive"),
            "endTime": timestamp_schema("Window end, inclusive"),
            "granularity": enum_schema(Granularity, "Requested bucket size"),
        },
        "required": ["startTime", "endTime"],
    },
)


async def get_ticket_analytics(store: PortalStore, arguments: dict) -> list[types.TextContent]:
    request = parse_arguments(AnalyticsRequest, arguments)
    analytics = store.get_ticket_analytics(request)

    result = {
        "granularity": request.granularity.value,
        **dump(analytics),
    }
    return respond(result)
