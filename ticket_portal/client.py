"""
client.py — Typed client for the ticketing portal
=================================================
Dashboards and scripts talk to the portal through MCP tool calls. This
module hides the call_tool / json.loads round trip behind one coroutine per
operation that takes and returns the pydantic models from schema.py.

    async with connect("http://localhost:8001/mcp") as portal:
        ticket_id = await portal.submit_ticket(NewTicket(...))
        ticket = await portal.get_ticket(ticket_id)

PortalClient also wraps any already-initialized ClientSession, which is
how the tests drive an in-memory server.
"""

import json
import logging
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from typing import Any, Optional

from mcp import ClientSession
from mcp.client.streamable_http import streamable_http_client

from ticket_portal import config
from ticket_portal.dates import period_key, period_sort_key, rollup_key
from ticket_portal.errors import PortalCallError
from ticket_portal.schema import (
    AnalyticsRequest,
    Brand,
    Granularity,
    HelpTopic,
    NewTicket,
    PeriodCounts,
    Platform,
    PlatformShare,
    Ticket,
    TicketAnalytics,
    TicketCounts,
    TicketFilters,
    TicketPriority,
    TicketStatus,
)

logger = logging.getLogger(__name__)


def _to_arguments(model) -> dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


class PortalClient:
    def __init__(self, session: ClientSession) -> None:
        self._session = session

    async def call(self, name: str, arguments: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """Call a tool and return its decoded JSON payload. Error results raise PortalCallError."""
        result = await self._session.call_tool(name=name, arguments=arguments or {})
        if result.isError:
            error_text = result.content[0].text if result.content else "Unknown error"
            logger.warning("%s returned an error: %s", name, error_text)
            raise PortalCallError(name, error_text)
        return json.loads(result.content[0].text)

    async def list_tool_names(self) -> list[str]:
        result = await self._session.list_tools()
        return [tool.name for tool in result.tools]

    # ── Tickets ───────────────────────────────────────────────────────────────

    async def submit_ticket(self, new_ticket: NewTicket) -> int:
        data = await self.call("submitTicket", _to_arguments(new_ticket))
        return data["ticketId"]

    async def get_ticket(self, ticket_id: int) -> Optional[Ticket]:
        data = await self.call("getTicket", {"ticketId": ticket_id})
        if data["ticket"] is None:
            return None
        return Ticket.model_validate(data["ticket"])

    async def get_tickets(self, filters: Optional[TicketFilters] = None) -> list[Ticket]:
        data = await self.call("getTickets", _to_arguments(filters or TicketFilters()))
        return [Ticket.model_validate(t) for t in data["tickets"]]

    async def search_tickets(self, search_term: str) -> list[Ticket]:
        data = await self.call("searchTickets", {"searchTerm": search_term})
        return [Ticket.model_validate(t) for t in data["tickets"]]

    async def update_ticket_status(self, ticket_id: int, new_status: TicketStatus) -> None:
        await self.call("updateTicketStatus", {"ticketId": ticket_id, "newStatus": TicketStatus(new_status).value})

    async def update_ticket_priority(self, ticket_id: int, new_priority: TicketPriority) -> None:
        await self.call(
            "updateTicketPriority",
            {"ticketId": ticket_id, "newPriority": TicketPriority(new_priority).value},
        )

    async def add_comment(self, ticket_id: int, author: str, content: str) -> None:
        await self.call("addComment", {"ticketId": ticket_id, "author": author, "content": content})

    async def get_ticket_counts(self) -> TicketCounts:
        return TicketCounts.model_validate(await self.call("getTicketCounts"))

    async def get_display_counters(self) -> dict[Platform, int]:
        data = await self.call("getDisplayCounters")
        return {Platform(name): counter for name, counter in data.items()}

    # ── Help Center ───────────────────────────────────────────────────────────

    async def save_help_topic(self, topic: HelpTopic) -> int:
        data = await self.call("saveHelpTopic", _to_arguments(topic))
        return data["topicId"]

    async def delete_help_topic(self, topic_id: int) -> None:
        await self.call("deleteHelpTopic", {"topicId": topic_id})

    async def publish_help_content(self) -> None:
        await self.call("publishHelpContent")

    async def get_help_topics(self) -> list[HelpTopic]:
        data = await self.call("getHelpTopics")
        return [HelpTopic.model_validate(t) for t in data["topics"]]

    async def get_help_topics_draft(self) -> list[HelpTopic]:
        data = await self.call("getHelpTopicsDraft")
        return [HelpTopic.model_validate(t) for t in data["topics"]]

    # ── Analytics ─────────────────────────────────────────────────────────────

    async def get_ticket_analytics(self, request: AnalyticsRequest) -> TicketAnalytics:
        data = await self.call("getTicketAnalytics", _to_arguments(request))
        return TicketAnalytics.model_validate({"periods": data["periods"]})

    async def get_filtered_analytics(
        self,
        request: AnalyticsRequest,
        brand: Optional[Brand] = None,
        platform: Optional[Platform] = None,
    ) -> TicketAnalytics:
        """
        Analytics restricted to one brand and/or platform, bucketed by the
        request's granularity.

        The server-side aggregation has no brand or platform filter, so this
        lists the matching tickets inside the window and counts them here.
        Periods come back sorted; an empty window gives no periods at all.
        """
        tickets = await self.get_tickets(TicketFilters(
            brand=brand,
            platform=platform,
            start_date=request.start_time,
            end_date=request.end_time,
        ))
        return bucket_tickets(tickets, request.granularity)


def sorted_periods(analytics: TicketAnalytics) -> list[tuple[str, PeriodCounts]]:
    """Periods in chronological order; the server returns them unsorted."""
    return sorted(analytics.periods, key=lambda period: period_sort_key(period[0]))


def rollup_periods(analytics: TicketAnalytics, granularity: Granularity) -> list[tuple[str, PeriodCounts]]:
    """
    Merge daily periods into week (Sunday start) or month buckets.

    Buckets are keyed like the dashboards key them: the Sunday's "Y-M-D" for
    weeks and "Y-M-1" for months. Granularity.DAY only sorts. The result is
    in chronological order.
    """
    buckets: dict[str, PeriodCounts] = {}
    for key, counts in analytics.periods:
        bucket = buckets.setdefault(rollup_key(key, granularity), PeriodCounts())
        bucket.onespan += counts.onespan
        bucket.observe_ai += counts.observe_ai
        bucket.freshworks += counts.freshworks
        bucket.total += counts.total
    return sorted(buckets.items(), key=lambda period: period_sort_key(period[0]))


def bucket_tickets(tickets: Iterable[Ticket], granularity: Granularity) -> TicketAnalytics:
    """Count already-fetched tickets per period and platform, periods sorted."""
    buckets: dict[str, PeriodCounts] = {}
    for ticket in tickets:
        key = rollup_key(period_key(ticket.submission_time), granularity)
        counts = buckets.setdefault(key, PeriodCounts())
        if ticket.platform is Platform.ONESPAN:
            counts.onespan += 1
        elif ticket.platform is Platform.OBSERVE_AI:
            counts.observe_ai += 1
        elif ticket.platform is Platform.FRESHWORKS:
            counts.freshworks += 1
        counts.total += 1
    return TicketAnalytics(periods=sorted(buckets.items(), key=lambda period: period_sort_key(period[0])))


def platform_distribution(analytics: TicketAnalytics) -> list[PlatformShare]:
    """Each platform's share of all tickets in ``analytics``, skipping platforms with none."""
    totals = {platform: 0 for platform in Platform}
    for _, counts in analytics.periods:
        totals[Platform.ONESPAN] += counts.onespan
        totals[Platform.OBSERVE_AI] += counts.observe_ai
        totals[Platform.FRESHWORKS] += counts.freshworks

    overall = sum(totals.values())
    if overall == 0:
        return []
    return [
        PlatformShare(platform=platform, count=count, percentage=round(count * 100 / overall, 1))
        for platform, count in totals.items()
        if count > 0
    ]


@asynccontextmanager
async def connect(url: str = config.SERVER_URL) -> AsyncIterator[PortalClient]:
    """Open a Streamable HTTP session to a running portal server."""
    async with streamable_http_client(url) as (read, write, _):
        async with ClientSession(read, write) as session:
            await session.initialize()
            logger.info("Connected to ticket portal at %s", url)
            yield PortalClient(session)
