"""
tools/tickets.py — MCP tools for ticket operations
==================================================
Nine tools live here:
  - submitTicket          : file a new ticket and return its id
  - getTicket             : fetch one ticket, or null if the id is unknown
  - getTickets            : filtered listing, newest first
  - searchTickets         : case-insensitive substring search
  - updateTicketStatus    : set Submitted / InProgress / Resolved
  - updateTicketPriority  : set empty / low / medium / high
  - addComment            : append a timestamped comment
  - getTicketCounts       : status breakdown per platform
  - getDisplayCounters    : next display-name number per platform

Each tool has the same three parts: a JSON Schema dict, a types.Tool
descriptor and an async handler taking (store, arguments). Mutations on an
unknown ticket id raise TicketNotFoundError; the server turns that into an
error result, so the caller never sees a half-applied change.
"""

from mcp import types

from ticket_portal.schema import (
    Brand,
    NewTicket,
    Platform,
    TicketFilters,
    TicketPriority,
    TicketStatus,
    WireModel,
)
from ticket_portal.store import PortalStore
from ticket_portal.tools.common import dump, enum_schema, parse_arguments, respond, timestamp_schema

ticket_id_schema = {"type": "integer", "description": "Numeric ticket id returned by submitTicket"}


class TicketIdArgs(WireModel):
    ticket_id: int


class SearchArgs(WireModel):
    search_term: str


class StatusArgs(WireModel):
    ticket_id: int
    new_status: TicketStatus


class PriorityArgs(WireModel):
    ticket_id: int
    new_priority: TicketPriority


class CommentArgs(WireModel):
    ticket_id: int
    author: str
    content: str


# ── submitTicket ──────────────────────────────────────────────────────────────

submit_ticket_input_schema = {
    "type": "object",
    "properties": {
        "platform": enum_schema(Platform, "Platform the issue concerns"),
        "brand": enum_schema(Brand, "Brand the submitting office belongs to"),
        "issueDescription": {"type": "string", "description": "What went wrong"},
        "officeName": {"type": "string", "description": "Submitting office"},
        "agentName": {"type": "string", "description": "Agent affected by the issue"},
        "employeeId": {"type": "string", "description": "Employee id of the agent"},
        "email": {"type": "string", "description": "Contact email"},
        "freshworksEmail": {"type": ["string", "null"], "description": "Freshworks login, if relevant"},
        "extension": {"type": ["string", "null"], "description": "Phone extension"},
        "policyNumber": {"type": ["string", "null"], "description": "Related policy number"},
        "attachments": {
            "type": "array",
            "description": "Opaque references to uploaded files, stored as given",
            "items": {
                "type": "object",
                "properties": {
                    "url": {"type": "string"},
                    "filename": {"type": ["string", "null"]},
                    "contentType": {"type": ["string", "null"]},
                    "size": {"type": ["integer", "null"]},
                },
                "required": ["url"],
            },
        },
    },
    "required": ["platform", "brand", "issueDescription", "officeName", "agentName", "employeeId", "email"],
}

submit_ticket_tool = types.Tool(
    name="submitTicket",
    description=(
        "Submit a new support ticket. The ticket starts as Submitted with an empty "
        "priority and gets a per-platform display name such as OS-7. Returns the new id."
    ),
    inputSchema=submit_ticket_input_schema,
)


async def submit_ticket(store: PortalStore, arguments: dict) -> list[types.TextContent]:
    new_ticket = parse_arguments(NewTicket, arguments)
    ticket_id = store.submit_ticket(new_ticket)
    ticket = store.get_ticket(ticket_id)

    result = {
        "ticketId": ticket_id,
        "displayName": ticket.display_name,
        "submissionTime": ticket.submission_time,
    }
    return respond(result)


# ── getTicket ─────────────────────────────────────────────────────────────────
# A missing ticket is a normal answer here, not an error.

get_ticket_tool = types.Tool(
    name="getTicket",
    description="Fetch a single ticket by id. Returns ticket: null when no such ticket exists.",
    inputSchema={
        "type": "object",
        "properties": {"ticketId": ticket_id_schema},
        "required": ["ticketId"],
    },
)


async def get_ticket(store: PortalStore, arguments: dict) -> list[types.TextContent]:
    args = parse_arguments(TicketIdArgs, arguments)
    ticket = store.get_ticket(args.ticket_id)

    result = {
        "ticketId": args.ticket_id,
        "ticket": dump(ticket) if ticket is not None else None,
    }
    return respond(result)


# ── getTickets ────────────────────────────────────────────────────────────────

get_tickets_tool = types.Tool(
    name="getTickets",
    description=(
        "List tickets, most recent first. Every filter is optional; startDate and "
        "endDate are inclusive nanosecond bounds on submission time."
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "platformFilter": enum_schema(Platform, "Only this platform", nullable=True),
            "statusFilter": enum_schema(TicketStatus, "Only this status", nullable=True),
            "brandFilter": enum_schema(Brand, "Only this brand", nullable=True),
            "priorityFilter": enum_schema(TicketPriority, "Only this priority", nullable=True),
            "startDate": timestamp_schema("Earliest submission time, inclusive", nullable=True),
            "endDate": timestamp_schema("Latest submission time, inclusive", nullable=True),
        },
        "required": [],
    },
)


async def get_tickets(store: PortalStore, arguments: dict) -> list[types.TextContent]:
    filters = parse_arguments(TicketFilters, arguments)
    tickets = store.get_tickets(filters)

    result = {
        "filters": dump(filters),
        "count": len(tickets),
        "tickets": [dump(t) for t in tickets],
    }
    return respond(result)


# ── searchTickets ─────────────────────────────────────────────────────────────

search_tickets_tool = types.Tool(
    name="searchTickets",
    description=(
        "Case-insensitive substring search over display name, issue description, office, "
        "agent, employee id, email, Freshworks email and every comment's author and text. "
        "Results keep submission order."
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "searchTerm": {"type": "string", "description": "Text to look for"},
        },
        "required": ["searchTerm"],
    },
)


async def search_tickets(store: PortalStore, arguments: dict) -> list[types.TextContent]:
    args = parse_arguments(SearchArgs, arguments)
    matches = store.search_tickets(args.search_term)

    result = {
        "searchTerm": args.search_term,
        "matchCount": len(matches),
        "tickets": [dump(t) for t in matches],
    }
    return respond(result)


# ── updateTicketStatus ────────────────────────────────────────────────────────
# Any status may move to any other; there is no transition graph.

update_ticket_status_tool = types.Tool(
    name="updateTicketStatus",
    description="Set a ticket's status. Fails if the ticket id does not exist.",
    inputSchema={
        "type": "object",
        "properties": {
            "ticketId": ticket_id_schema,
            "newStatus": enum_schema(TicketStatus, "The new status"),
        },
        "required": ["ticketId", "newStatus"],
    },
)


async def update_ticket_status(store: PortalStore, arguments: dict) -> list[types.TextContent]:
    args = parse_arguments(StatusArgs, arguments)
    store.update_ticket_status(args.ticket_id, args.new_status)
    return respond({"ticketId": args.ticket_id, "status": args.new_status.value})


# ── updateTicketPriority ──────────────────────────────────────────────────────

update_ticket_priority_tool = types.Tool(
    name="updateTicketPriority",
    description="Set a ticket's priority. Fails if the ticket id does not exist.",
    inputSchema={
        "type": "object",
        "properties": {
            "ticketId": ticket_id_schema,
            "newPriority": enum_schema(TicketPriority, "The new priority"),
        },
        "required": ["ticketId", "newPriority"],
    },
)


async def update_ticket_priority(store: PortalStore, arguments: dict) -> list[types.TextContent]:
    args = parse_arguments(PriorityArgs, arguments)
    store.update_ticket_priority(args.ticket_id, args.new_priority)
    return respond({"ticketId": args.ticket_id, "priority": args.new_priority.value})


# ── addComment ────────────────────────────────────────────────────────────────

add_comment_tool = types.Tool(
    name="addComment",
    description=(
        "Append a comment to a ticket, stamped with the current time. "
        "Comments are never edited or removed. Fails if the ticket id does not exist."
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "ticketId": ticket_id_schema,
            "author": {"type": "string", "description": "Who is writing the comment"},
            "content": {"type": "string", "description": "Comment text"},
        },
        "required": ["ticketId", "author", "content"],
    },
)


async def add_comment(store: PortalStore, arguments: dict) -> list[types.TextContent]:
    args = parse_arguments(CommentArgs, arguments)
    store.add_comment(args.ticket_id, args.author, args.content)
    ticket = store.get_ticket(args.ticket_id)

    result = {
        "ticketId": args.ticket_id,
        "displayName": ticket.display_name,
        "totalComments": len(ticket.comments),
    }
    return respond(result)


# ── getTicketCounts ───────────────────────────────────────────────────────────

get_ticket_counts_tool = types.Tool(
    name="getTicketCounts",
    description="Count tickets by status for each platform and across all platforms.",
    inputSchema={"type": "object", "properties": {}, "required": []},
)


async def get_ticket_counts(store: PortalStore, arguments: dict) -> list[types.TextContent]:
    return respond(dump(store.get_ticket_counts()))


# ── getDisplayCounters ────────────────────────────────────────────────────────

get_display_counters_tool = types.Tool(
    name="getDisplayCounters",
    description=(
        "Next display-name number each platform will hand out, e.g. OneSpan: 4 means "
        "the next OneSpan ticket is OS-4. Read-only."
    ),
    inputSchema={"type": "object", "properties": {}, "required": []},
)


async def get_display_counters(store: PortalStore, arguments: dict) -> list[types.TextContent]:
    counters = store.get_display_counters()
    return respond({platform.value: counter for platform, counter in counters.items()})
