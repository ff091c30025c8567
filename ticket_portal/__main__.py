"""
__main__.py — Command line entry point
======================================
Usage:
    Terminal 1:  python -m ticket_portal serve
    Terminal 2:  python -m ticket_portal demo

`serve` runs the MCP server under uvicorn. `demo` connects to a running
server and walks through every operation: submitting tickets, triaging
them, searching, editing and publishing the Help Center, and pulling
analytics for the last week.
"""

import argparse
import asyncio
import logging

import uvicorn

from ticket_portal import config
from ticket_portal.client import PortalClient, connect, platform_distribution, rollup_periods, sorted_periods
from ticket_portal.dates import NANOS_PER_DAY
from ticket_portal.errors import PortalCallError
from ticket_portal.schema import (
    AnalyticsRequest,
    Brand,
    Granularity,
    HelpTopic,
    NewTicket,
    Platform,
    TicketFilters,
    TicketPriority,
    TicketStatus,
)
from ticket_portal.server import create_app

DEMO_TICKETS = [
    NewTicket(
        platform=Platform.ONESPAN,
        brand=Brand.AMAXTX,
        issue_description="Signing ceremony stuck on the last page for every customer.",
        office_name="Houston Main",
        agent_name="Alice Smith",
        employee_id="10442",
        email="alice.smith@example.com",
        policy_number="TX-99812",
    ),
    NewTicket(
        platform=Platform.FRESHWORKS,
        brand=Brand.ALPA,
        issue_description="Cannot log in to the helpdesk after password reset.",
        office_name="Birmingham",
        agent_name="Jordan Lee",
        employee_id="20871",
        email="jordan.lee@example.com",
        freshworks_email="jlee@support.example.com",
        extension="4417",
    ),
    NewTicket(
        platform=Platform.OBSERVE_AI,
        brand=Brand.VIRTUAL_STORE,
        issue_description="Call recordings missing since Monday.",
        office_name="Virtual Store",
        agent_name="Sam Patel",
        employee_id="33019",
        email="sam.patel@example.com",
    ),
]


def print_section(title: str) -> None:
    """Print a visible section header to make output easy to read."""
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}")


async def run_demo(portal: PortalClient) -> None:
    print_section("submitTicket")
    ticket_ids = []
    for new_ticket in DEMO_TICKETS:
        ticket_id = await portal.submit_ticket(new_ticket)
        ticket_ids.append(ticket_id)
        ticket = await portal.get_ticket(ticket_id)
        print(f"  [{ticket.id}] {ticket.display_name}  {ticket.platform.value}  {ticket.status.value}")

    print_section("Triage")
    first = ticket_ids[0]
    await portal.update_ticket_status(first, TicketStatus.IN_PROGRESS)
    await portal.update_ticket_priority(first, TicketPriority.HIGH)
    await portal.add_comment(first, "ops-admin", "Escalated to the e-signature vendor.")
    ticket = await portal.get_ticket(first)
    print(f"  {ticket.display_name}: {ticket.status.value} / {ticket.priority.value}")
    for comment in ticket.comments:
        print(f"    - {comment.author}: {comment.content}")

    try:
        await portal.update_ticket_status(10_000, TicketStatus.RESOLVED)
    except PortalCallError as e:
        print(f"  ERROR (expected): {e.message}")

    print_section("getTickets  (platform=Freshworks)")
    for t in await portal.get_tickets(TicketFilters(platform=Platform.FRESHWORKS)):
        print(f"  {t.display_name}  {t.agent_name}  {t.office_name}")

    print_section("searchTickets  ('vendor')")
    for t in await portal.search_tickets("vendor"):
        print(f"  {t.display_name}  {t.agent_name}  {t.issue_description}")

    print_section("getTicketCounts")
    counts = await portal.get_ticket_counts()
    for platform, status_counts in counts.platforms.items():
        print(f"  {platform.value:<11} total={status_counts.total} submitted={status_counts.submitted} "
              f"in_progress={status_counts.in_progress} resolved={status_counts.resolved}")

    print_section("getDisplayCounters")
    for platform, counter in (await portal.get_display_counters()).items():
        print(f"  {platform.value:<11} next number {counter}")

    print_section("Help Center")
    topic_id = await portal.save_help_topic(HelpTopic(
        topic_name="Resetting a Freshworks password",
        platform=Platform.FRESHWORKS,
        explanation="Use the [reset page](https://support.example.com/reset) and wait five minutes.",
    ))
    await portal.publish_help_content()
    for topic in await portal.get_help_topics():
        print(f"  published [{topic.id}] {topic.topic_name}")
    print(f"  drafts: {len(await portal.get_help_topics_draft())}, first draft id {topic_id}")

    print_section("getTicketAnalytics  (last 7 days)")
    ticket = await portal.get_ticket(ticket_ids[-1])
    end_time = ticket.submission_time
    analytics_request = AnalyticsRequest(
        start_time=end_time - 7 * NANOS_PER_DAY,
        end_time=end_time,
        granularity=Granularity.DAY,
    )
    analytics = await portal.get_ticket_analytics(analytics_request)
    for key, period in sorted_periods(analytics):
        print(f"  {key:<11} OS={period.onespan} OAI={period.observe_ai} FW={period.freshworks} total={period.total}")

    print_section("Weekly roll-up and platform share")
    for key, period in rollup_periods(analytics, Granularity.WEEK):
        print(f"  week of {key:<11} total={period.total}")
    for share in platform_distribution(analytics):
        print(f"  {share.platform.value:<11} {share.count} ({share.percentage}%)")

    print_section("Analytics for brand AMAXTX  (by month)")
    amaxtx = await portal.get_filtered_analytics(
        analytics_request.model_copy(update={"granularity": Granularity.MONTH}), brand=Brand.AMAXTX,
    )
    for key, period in amaxtx.periods:
        print(f"  {key:<11} OS={period.onespan} OAI={period.observe_ai} FW={period.freshworks} total={period.total}")


async def demo(url: str) -> None:
    async with connect(url) as portal:
        print(f"Connected to ticket portal at {url}")
        print(f"Tools: {', '.join(await portal.list_tool_names())}")
        await run_demo(portal)

    print(f"\n{'=' * 60}")
    print("  Demo complete.")
    print(f"{'=' * 60}\n")


def main() -> None:
    parser = argparse.ArgumentParser(description="Operations ticketing portal (MCP server)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run the MCP server")
    serve_parser.add_argument("--host", default=config.HOST)
    serve_parser.add_argument("--port", type=int, default=config.PORT)

    demo_parser = subparsers.add_parser("demo", help="Exercise a running server")
    demo_parser.add_argument("--url", default=config.SERVER_URL)

    args = parser.parse_args()
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        uvicorn.run(create_app(), host=args.host, port=args.port, log_level=config.LOG_LEVEL.lower())
    else:
        asyncio.run(demo(args.url))


if __name__ == "__main__":
    main()
