"""
tools/help_topics.py — MCP tools for the Help Center
====================================================
Admins edit drafts; end users only ever see what was last published.
  - saveHelpTopic       : create (id 0 or unknown) or update a draft
  - deleteHelpTopic     : remove a draft, no-op if it does not exist
  - publishHelpContent  : replace the published set with the drafts
  - getHelpTopics       : published topics
  - getHelpTopicsDraft  : draft topics
"""

from mcp import types

from ticket_portal.schema import NEW_TOPIC_ID, HelpTopic, Platform, WireModel
from ticket_portal.store import PortalStore
from ticket_portal.tools.common import dump, enum_schema, parse_arguments, respond


class TopicIdArgs(WireModel):
    topic_id: int


# ── saveHelpTopic ─────────────────────────────────────────────────────────────

save_help_topic_tool = types.Tool(
    name="saveHelpTopic",
    description=(
        f"Save a draft help topic. Pass id {NEW_TOPIC_ID} (or omit it) to create a new "
        "topic; pass an existing draft id to overwrite its name, platform and explanation. "
        "createdTime and modifiedTime are set by the server. Returns the topic id."
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "id": {"type": "integer", "description": f"Existing draft id, or {NEW_TOPIC_ID} for a new topic"},
            "topicName": {"type": "string", "description": "Topic title"},
            "platform": enum_schema(Platform, "Platform the topic is about"),
            "explanation": {"type": "string", "description": "Article body; may contain simple link markup"},
            "createdTime": {"type": "integer", "description": "Ignored"},
            "modifiedTime": {"type": "integer", "description": "Ignored"},
        },
        "required": ["topicName", "platform", "explanation"],
    },
)


async def save_help_topic(store: PortalStore, arguments: dict) -> list[types.TextContent]:
    topic = parse_arguments(HelpTopic, arguments)
    topic_id = store.save_help_topic(topic)
    return respond({"topicId": topic_id})


# ── deleteHelpTopic ───────────────────────────────────────────────────────────

delete_help_topic_tool = types.Tool(
    name="deleteHelpTopic",
    description=(
        "Delete a draft help topic. Unknown ids are ignored. The published Help Center "
        "keeps the topic until the next publish."
    ),
    inputSchema={
        "type": "object",
        "properties": {"topicId": {"type": "integer", "description": "Draft topic id"}},
        "required": ["topicId"],
    },
)


async def delete_help_topic(store: PortalStore, arguments: dict) -> list[types.TextContent]:
    args = parse_arguments(TopicIdArgs, arguments)
    store.delete_help_topic(args.topic_id)
    return respond({"topicId": args.topic_id})


# ── publishHelpContent ────────────────────────────────────────────────────────

publish_help_content_tool = types.Tool(
    name="publishHelpContent",
    description="Replace the published Help Center with a snapshot of every draft topic.",
    inputSchema={"type": "object", "properties": {}, "required": []},
)


async def publish_help_content(store: PortalStore, arguments: dict) -> list[types.TextContent]:
    store.publish_help_content()
    return respond({"publishedCount": len(store.get_help_topics())})


# ── getHelpTopics / getHelpTopicsDraft ────────────────────────────────────────

get_help_topics_tool = types.Tool(
    name="getHelpTopics",
    description="List the published help topics shown in the public Help Center.",
    inputSchema={"type": "object", "properties": {}, "required": []},
)


async def get_help_topics(store: PortalStore, arguments: dict) -> list[types.TextContent]:
    topics = store.get_help_topics()
    return respond({"count": len(topics), "topics": [dump(t) for t in topics]})


get_help_topics_draft_tool = types.Tool(
    name="getHelpTopicsDraft",
    description="List the draft help topics being edited by admins.",
    inputSchema={"type": "object", "properties": {}, "required": []},
)


async def get_help_topics_draft(store: PortalStore, arguments: dict) -> list[types.TextContent]:
    topics = store.get_help_topics_draft()
    return respond({"count": len(topics), "topics": [dump(t) for t in topics]})
