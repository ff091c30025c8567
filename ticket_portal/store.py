"""
store.py — In-memory ticket and Help Center store
=================================================
PortalStore is the whole "database" of the portal: the ticket map, the two
help-topic maps (draft and published) and the counters that hand out ids
and display names. One instance lives for the life of the server process
and is handed to every tool handler through the MCP lifespan context.

Every method runs to completion without awaiting anything, so on the
server's single event loop no two operations can interleave. Values going
in and out are copies: callers never hold a reference into the store.
"""

import itertools
import logging
from typing import Optional

from ticket_portal.clock import Clock, WallClock
from ticket_portal.dates import period_key
from ticket_portal.errors import TicketNotFoundError
from ticket_portal.schema import (
    DISPLAY_PREFIXES,
    AnalyticsRequest,
    Comment,
    HelpTopic,
    NewTicket,
    PeriodCounts,
    Platform,
    StatusCounts,
    Ticket,
    TicketAnalytics,
    TicketCounts,
    TicketFilters,
    TicketPriority,
    TicketStatus,
)

logger = logging.getLogger(__name__)


class PortalStore:
    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock: Clock = clock or WallClock()

        self._tickets: dict[int, Ticket] = {}
        self._ticket_ids = itertools.count(0)
        self._display_counters: dict[Platform, int] = {platform: 1 for platform in Platform}

        self._drafts: dict[int, HelpTopic] = {}
        self._published: dict[int, HelpTopic] = {}
        # Starts at 1 so a fresh id never equals NEW_TOPIC_ID.
        self._topic_ids = itertools.count(1)

    # ── Tickets ───────────────────────────────────────────────────────────────

    def submit_ticket(self, new_ticket: NewTicket) -> int:
        """Store a new ticket and return its id."""
        platform = new_ticket.platform
        counter = self._display_counters[platform]
        display_name = f"{DISPLAY_PREFIXES[platform]}-{counter}"
        self._display_counters[platform] = counter + 1

        ticket_id = next(self._ticket_ids)
        ticket = Ticket(
            **new_ticket.model_dump(),
            id=ticket_id,
            display_name=display_name,
            submission_time=self._clock(),
        )
        self._tickets[ticket_id] = ticket

        logger.info("Ticket %s submitted as id %d (%s)", display_name, ticket_id, ticket.brand.value)
        return ticket_id

    def get_ticket(self, ticket_id: int) -> Optional[Ticket]:
        ticket = self._tickets.get(ticket_id)
        return ticket.model_copy(deep=True) if ticket is not None else None

    def get_tickets(self, filters: Optional[TicketFilters] = None) -> list[Ticket]:
        """
        Return tickets matching every given filter, newest first.

        Absent filters match everything. ``start_date``/``end_date`` are
        inclusive bounds on ``submission_time``.
        """
        filters = filters or TicketFilters()
        matches = [t for t in self._tickets.values() if _matches_filters(t, filters)]
        matches.sort(key=lambda t: t.submission_time, reverse=True)

        logger.debug("get_tickets matched %d of %d tickets", len(matches), len(self._tickets))
        return [t.model_copy(deep=True) for t in matches]

    def search_tickets(self, term: str) -> list[Ticket]:
        """
        Case-insensitive substring search, in submission order.

        An empty term is a substring of everything and so matches every ticket.
        """
        needle = term.lower()
        matches = [
            t for t in self._tickets.values()
            if any(needle in field.lower() for field in _searchable_fields(t))
        ]
        logger.debug("search_tickets(%r) matched %d tickets", term, len(matches))
        return [t.model_copy(deep=True) for t in matches]

    def update_ticket_status(self, ticket_id: int, new_status: TicketStatus) -> None:
        ticket = self._require_ticket(ticket_id)
        old_status = ticket.status
        ticket.status = TicketStatus(new_status)
        logger.info("Ticket %s status %s -> %s", ticket.display_name, old_status.value, ticket.status.value)

    def update_ticket_priority(self, ticket_id: int, new_priority: TicketPriority) -> None:
        ticket = self._require_ticket(ticket_id)
        old_priority = ticket.priority
        ticket.priority = TicketPriority(new_priority)
        logger.info("Ticket %s priority %s -> %s", ticket.display_name, old_priority.value, ticket.priority.value)

    def add_comment(self, ticket_id: int, author: str, content: str) -> None:
        ticket = self._require_ticket(ticket_id)
        ticket.comments.append(Comment(author=author, content=content, timestamp=self._clock()))
        logger.info("Comment by %s added to ticket %s", author, ticket.display_name)

    def get_ticket_counts(self) -> TicketCounts:
        """Status breakdown per platform and across all platforms."""
        platforms = {platform: StatusCounts() for platform in Platform}
        all_platforms = StatusCounts()
        for ticket in self._tickets.values():
            for counts in (platforms[ticket.platform], all_platforms):
                counts.total += 1
                if ticket.status is TicketStatus.SUBMITTED:
                    counts.submitted += 1
                elif ticket.status is TicketStatus.IN_PROGRESS:
                    counts.in_progress += 1
                elif ticket.status is TicketStatus.RESOLVED:
                    counts.resolved += 1
        return TicketCounts(platforms=platforms, all_platforms=all_platforms)

    def get_display_counters(self) -> dict[Platform, int]:
        """Next display-name number each platform will hand out."""
        return dict(self._display_counters)

    def _require_ticket(self, ticket_id: int) -> Ticket:
        ticket = self._tickets.get(ticket_id)
        if ticket is None:
            logger.warning("Rejected mutation of unknown ticket id %s", ticket_id)
            raise TicketNotFoundError(ticket_id)
        return ticket

    # ── Help Center ───────────────────────────────────────────────────────────

    def save_help_topic(self, topic: HelpTopic) -> int:
        """
        Create or update a draft topic and return its id.

        An id that matches an existing draft updates it in place, keeping its
        ``created_time``. Any other id (including NEW_TOPIC_ID) creates a
        new draft under a freshly issued id. Incoming timestamps are ignored.
        """
        now = self._clock()
        existing = self._drafts.get(topic.id)

        if existing is None:
            topic_id = next(self._topic_ids)
            created_time = now
            logger.info("Help topic %d created: %s", topic_id, topic.topic_name)
        else:
            topic_id = existing.id
            created_time = existing.created_time
            logger.info("Help topic %d updated: %s", topic_id, topic.topic_name)

        self._drafts[topic_id] = HelpTopic(
            id=topic_id,
            topic_name=topic.topic_name,
            platform=topic.platform,
            explanation=topic.explanation,
            created_time=created_time,
            modified_time=now,
        )
        return topic_id

    def delete_help_topic(self, topic_id: int) -> None:
        """Drop a draft topic. Unknown ids are ignored; the published set is untouched."""
        if self._drafts.pop(topic_id, None) is not None:
            logger.info("Help topic %d deleted from drafts", topic_id)

    def publish_help_content(self) -> None:
        """Replace the published Help Center with a snapshot of the drafts."""
        now = self._clock()
        self._published = {
            topic_id: topic.model_copy(update={"modified_time": now})
            for topic_id, topic in self._drafts.items()
        }
        logger.info("Published %d help topics", len(self._published))

    def get_help_topics(self) -> list[HelpTopic]:
        return [topic.model_copy() for topic in self._published.values()]

    def get_help_topics_draft(self) -> list[HelpTopic]:
        return [topic.model_copy() for topic in self._drafts.values()]

    # ── Analytics ─────────────────────────────────────────────────────────────

    def get_ticket_analytics(self, request: AnalyticsRequest) -> TicketAnalytics:
        """
        Count tickets per period and platform inside an inclusive time window.

        Periods come back in first-seen order, not sorted. The granularity is
        accepted but every period is currently a single day. An empty window
        yields one all-zero period keyed to today.
        """
        periods: dict[str, PeriodCounts] = {}
        for ticket in self._tickets.values():
            if not request.start_time <= ticket.submission_time <= request.end_time:
                continue

            counts = periods.setdefault(period_key(ticket.submission_time), PeriodCounts())
            if ticket.platform is Platform.ONESPAN:
                counts.onespan += 1
            elif ticket.platform is Platform.OBSERVE_AI:
                counts.observe_ai += 1
            elif ticket.platform is Platform.FRESHWORKS:
                counts.freshworks += 1
            counts.total += 1

        if not periods:
            periods[period_key(self._clock())] = PeriodCounts()

        logger.debug(
            "Analytics %s..%s (%s): %d period(s)",
            request.start_time, request.end_time, request.granularity.value, len(periods),
        )
        return TicketAnalytics(periods=list(periods.items()))


# ── Helpers ───────────────────────────────────────────────────────────────────

def _matches_filters(ticket: Ticket, filters: TicketFilters) -> bool:
    if filters.platform is not None and ticket.platform != filters.platform:
        return False
    if filters.status is not None and ticket.status != filters.status:
        return False
    if filters.brand is not None and ticket.brand != filters.brand:
        return False
    if filters.priority is not None and ticket.priority != filters.priority:
        return False
    if filters.start_date is not None and ticket.submission_time < filters.start_date:
        return False
    if filters.end_date is not None and ticket.submission_time > filters.end_date:
        return False
    return True


def _searchable_fields(ticket: Ticket) -> list[str]:
    fields = [
        ticket.display_name,
        ticket.issue_description,
        ticket.office_name,
        ticket.agent_name,
        ticket.employee_id,
        ticket.email,
    ]
    if ticket.freshworks_email is not None:
        fields.append(ticket.freshworks_email)
    for comment in ticket.comments:
        fields.append(comment.author)
        fields.append(comment.content)
    return fields
