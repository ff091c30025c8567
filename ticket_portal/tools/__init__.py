from ticket_portal.tools.analytics import get_ticket_analytics_tool, get_ticket_analytics
from ticket_portal.tools.help_topics import (
    save_help_topic_tool, save_help_topic,
    delete_help_topic_tool, delete_help_topic,
    publish_help_content_tool, publish_help_content,
    get_help_topics_tool, get_help_topics,
    get_help_topics_draft_tool, get_help_topics_draft,
)
from ticket_portal.tools.tickets import (
    submit_ticket_tool, submit_ticket,
    get_ticket_tool, get_ticket,
    get_tickets_tool, get_tickets,
    search_tickets_tool, search_tickets,
    update_ticket_status_tool, update_ticket_status,
    update_ticket_priority_tool, update_ticket_priority,
    add_comment_tool, add_comment,
    get_ticket_counts_tool, get_ticket_counts,
    get_display_counters_tool, get_display_counters,
)

# Registry mapping tool name -> {"tool": types.Tool, "handler": callable}
# Handlers are called as handler(store, arguments). To add a tool, write its
# descriptor + handler in the right module and add one entry here.
tools = {
    submit_ticket_tool.name:          {"tool": submit_ticket_tool,          "handler": submit_ticket},
    get_ticket_tool.name:             {"tool": get_ticket_tool,             "handler": get_ticket},
    get_tickets_tool.name:            {"tool": get_tickets_tool,            "handler": get_tickets},
    search_tickets_tool.name:         {"tool": search_tickets_tool,         "handler": search_tickets},
    update_ticket_status_tool.name:   {"tool": update_ticket_status_tool,   "handler": update_ticket_status},
    update_ticket_priority_tool.name: {"tool": update_ticket_priority_tool, "handler": update_ticket_priority},
    add_comment_tool.name:            {"tool": add_comment_tool,            "handler": add_comment},
    get_ticket_counts_tool.name:      {"tool": get_ticket_counts_tool,      "handler": get_ticket_counts},
    get_display_counters_tool.name:   {"tool": get_display_counters_tool,   "handler": get_display_counters},
    save_help_topic_tool.name:        {"tool": save_help_topic_tool,        "handler": save_help_topic},
    delete_help_topic_tool.name:      {"tool": delete_help_topic_tool,      "handler": delete_help_topic},
    publish_help_content_tool.name:   {"tool": publish_help_content_tool,   "handler": publish_help_content},
    get_help_topics_tool.name:        {"tool": get_help_topics_tool,        "handler": get_help_topics},
    get_help_topics_draft_tool.name:  {"tool": get_help_topics_draft_tool,  "handler": get_help_topics_draft},
    get_ticket_analytics_tool.name:   {"tool": get_ticket_analytics_tool,   "handler": get_ticket_analytics},
}
