"""
schema.py — Pydantic models for the operations ticketing portal
===============================================================
These are the domain objects that flow between the store, the MCP tools
and the typed client. Python attributes are snake_case; on the wire every
model speaks camelCase (``displayName``, ``submissionTime``...), so always
dump with ``by_alias=True`` when building a tool response.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ── Enumerations ──────────────────────────────────────────────────────────────

class Platform(str, Enum):
    """Third-party platform a ticket is raised against."""
    ONESPAN = "OneSpan"
    OBSERVE_AI = "ObserveAI"
    FRESHWORKS = "Freshworks"


class Brand(str, Enum):
    AMAXTX = "AMAXTX"
    ALPA = "ALPA"
    AMAXCA = "AMAXCA"
    VIRTUAL_STORE = "VirtualStore"


class TicketStatus(str, Enum):
    SUBMITTED = "Submitted"
    IN_PROGRESS = "InProgress"
    RESOLVED = "Resolved"


class TicketPriority(str, Enum):
    EMPTY = "empty"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Granularity(str, Enum):
    """Requested analytics bucket size. All three currently produce daily keys."""
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


# Every platform must appear here; display names are "{prefix}-{counter}".
DISPLAY_PREFIXES: dict[Platform, str] = {
    Platform.ONESPAN: "OS",
    Platform.OBSERVE_AI: "OAI",
    Platform.FRESHWORKS: "FW",
}

# Help topics saved with this id (or any unknown id) are created, not updated.
NEW_TOPIC_ID = 0


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Tickets ───────────────────────────────────────────────────────────────────

class BlobRef(WireModel):
    """
    Opaque reference to an uploaded attachment.
    The store keeps these exactly as given; fetching bytes is the blob
    service's job.
    """
    url: str
    filename: Optional[str] = None
    content_type: Optional[str] = None
    size: Optional[int] = None


class Comment(WireModel):
    author: str
    content: str
    timestamp: int


class NewTicket(WireModel):
    """Everything a submitter provides. The store fills in the rest."""
    platform: Platform
    brand: Brand
    issue_description: str
    office_name: str
    agent_name: str
    employee_id: str
    email: str
    freshworks_email: Optional[str] = None
    extension: Optional[str] = None
    policy_number: Optional[str] = None
    attachments: list[BlobRef] = Field(default_factory=list)


class Ticket(NewTicket):
    id: int
    display_name: str
    submission_time: int
    status: TicketStatus = TicketStatus.SUBMITTED
    priority: TicketPriority = TicketPriority.EMPTY
    comments: list[Comment] = Field(default_factory=list)


class TicketFilters(WireModel):
    """Optional exact-match filters plus an inclusive submission-time range.

    The four enum filters travel as ``platformFilter``, ``statusFilter``,
    ``brandFilter`` and ``priorityFilter``.
    """
    platform: Optional[Platform] = Field(default=None, alias="platformFilter")
    status: Optional[TicketStatus] = Field(default=None, alias="statusFilter")
    brand: Optional[Brand] = Field(default=None, alias="brandFilter")
    priority: Optional[TicketPriority] = Field(default=None, alias="priorityFilter")
    start_date: Optional[int] = None
    end_date: Optional[int] = None


class StatusCounts(WireModel):
    total: int = 0
    submitted: int = 0
    in_progress: int = 0
    resolved: int = 0


class TicketCounts(WireModel):
    platforms: dict[Platform, StatusCounts]
    all_platforms: StatusCounts


# ── Help Center ───────────────────────────────────────────────────────────────

class HelpTopic(WireModel):
    id: int = NEW_TOPIC_ID
    topic_name: str
    platform: Platform
    explanation: str
    created_time: int = 0
    modified_time: int = 0


# ── Analytics ─────────────────────────────────────────────────────────────────

class AnalyticsRequest(WireModel):
    start_time: int
    end_time: int
    granularity: Granularity = Granularity.DAY


class PeriodCounts(WireModel):
    onespan: int = 0
    observe_ai: int = Field(default=0, alias="observeAI")
    freshworks: int = 0
    total: int = 0


class TicketAnalytics(WireModel):
    periods: list[tuple[str, PeriodCounts]]


class PlatformShare(WireModel):
    """One slice of the platform distribution; ``percentage`` is rounded to one decimal."""
    platform: Platform
    count: int
    percentage: float
