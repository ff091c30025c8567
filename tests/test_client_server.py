"""End-to-end: typed client -> MCP session -> server -> store, over in-memory streams."""
import asyncio

import pytest
from mcp.shared.memory import create_connected_server_and_client_session
from starlette.testclient import TestClient

from ticket_portal.client import PortalClient, platform_distribution, rollup_periods, sorted_periods
from ticket_portal.dates import NANOS_PER_DAY
from ticket_portal.errors import PortalCallError
from ticket_portal.schema import (
    AnalyticsRequest,
    Brand,
    Granularity,
    HelpTopic,
    PeriodCounts,
    Platform,
    PlatformShare,
    TicketFilters,
    TicketPriority,
    TicketStatus,
)
from ticket_portal.server import build_server, create_app
from tests.conftest import DAY_ZERO, make_ticket


def run_with_client(store, scenario):
    async def _run():
        async with create_connected_server_and_client_session(build_server(store)) as session:
            return await scenario(PortalClient(session))

    return asyncio.run(_run())


def test_server_lists_every_tool(store):
    async def scenario(portal):
        return set(await portal.list_tool_names())

    names = run_with_client(store, scenario)
    assert "submitTicket" in names
    assert "getTicketAnalytics" in names
    assert "getDisplayCounters" in names
    assert len(names) == 15


def test_ticket_lifecycle_through_client(store):
    async def scenario(portal):
        ticket_id = await portal.submit_ticket(make_ticket(agent_name="Alice Smith"))
        await portal.update_ticket_status(ticket_id, TicketStatus.IN_PROGRESS)
        await portal.update_ticket_priority(ticket_id, TicketPriority.MEDIUM)
        await portal.add_comment(ticket_id, "ops", "Investigating")
        return (
            await portal.get_ticket(ticket_id),
            await portal.get_ticket(ticket_id + 100),
            await portal.get_tickets(TicketFilters(status=TicketStatus.IN_PROGRESS)),
            await portal.search_tickets("ALICE"),
            await portal.get_ticket_counts(),
        )

    ticket, missing, in_progress, found, counts = run_with_client(store, scenario)

    assert ticket.display_name == "OS-1"
    assert ticket.status is TicketStatus.IN_PROGRESS
    assert ticket.priority is TicketPriority.MEDIUM
    assert [(c.author, c.content) for c in ticket.comments] == [("ops", "Investigating")]
    assert missing is None
    assert [t.id for t in in_progress] == [ticket.id]
    assert [t.id for t in found] == [ticket.id]
    assert counts.platforms[Platform.ONESPAN].in_progress == 1
    assert store.get_ticket(ticket.id) == ticket


def test_unknown_ticket_mutation_is_reported_as_error(store):
    async def scenario(portal):
        with pytest.raises(PortalCallError) as exc:
            await portal.add_comment(404, "ops", "hello")
        return exc.value

    error = run_with_client(store, scenario)
    assert error.tool == "addComment"
    assert "404" in error.message


def test_help_center_through_client(store):
    async def scenario(portal):
        topic_id = await portal.save_help_topic(HelpTopic(
            topic_name="Password reset",
            platform=Platform.FRESHWORKS,
            explanation="Use the reset page.",
        ))
        before = await portal.get_help_topics()
        await portal.publish_help_content()
        after = await portal.get_help_topics()
        drafts = await portal.get_help_topics_draft()
        await portal.delete_help_topic(topic_id)
        await portal.publish_help_content()
        return topic_id, before, after, drafts, await portal.get_help_topics()

    topic_id, before, after, drafts, emptied = run_with_client(store, scenario)

    assert before == []
    assert [t.id for t in after] == [topic_id]
    assert after[0].created_time == drafts[0].created_time
    assert emptied == []


def test_analytics_through_client_sorts_periods(store, clock):
    async def scenario(portal):
        clock.jump(NANOS_PER_DAY)
        await portal.submit_ticket(make_ticket(platform=Platform.OBSERVE_AI))
        clock.now = DAY_ZERO
        await portal.submit_ticket(make_ticket(platform=Platform.ONESPAN))
        return await portal.get_ticket_analytics(AnalyticsRequest(start_time=0, end_time=DAY_ZERO + 3 * NANOS_PER_DAY))

    analytics = run_with_client(store, scenario)

    assert [key for key, _ in analytics.periods] == ["2024-10-19", "2024-10-18"]
    assert sorted_periods(analytics) == [
        ("2024-10-18", PeriodCounts(onespan=1, total=1)),
        ("2024-10-19", PeriodCounts(observe_ai=1, total=1)),
    ]


async def submit_across_two_months(portal, clock):
    await portal.submit_ticket(make_ticket(platform=Platform.ONESPAN))
    await portal.submit_ticket(make_ticket(platform=Platform.ONESPAN))
    clock.now = DAY_ZERO + 2 * NANOS_PER_DAY
    await portal.submit_ticket(make_ticket(platform=Platform.OBSERVE_AI, brand=Brand.ALPA))
    clock.now = DAY_ZERO + 14 * NANOS_PER_DAY
    await portal.submit_ticket(make_ticket(platform=Platform.FRESHWORKS))


WHOLE_RANGE = AnalyticsRequest(start_time=0, end_time=DAY_ZERO + 30 * NANOS_PER_DAY)


def test_daily_analytics_roll_up_into_weeks_and_months(store, clock):
    async def scenario(portal):
        await submit_across_two_months(portal, clock)
        return await portal.get_ticket_analytics(WHOLE_RANGE)

    analytics = run_with_client(store, scenario)

    # 2024-10-18, 2024-10-20 and 2024-11-1 in the portal calendar.
    assert [key for key, _ in analytics.periods] == ["2024-10-18", "2024-10-20", "2024-11-1"]
    assert rollup_periods(analytics, Granularity.DAY) == sorted_periods(analytics)
    assert rollup_periods(analytics, Granularity.WEEK) == [
        ("2024-10-13", PeriodCounts(onespan=2, total=2)),
        ("2024-10-20", PeriodCounts(observe_ai=1, total=1)),
        ("2024-10-27", PeriodCounts(freshworks=1, total=1)),
    ]
    assert rollup_periods(analytics, Granularity.MONTH) == [
        ("2024-10-1", PeriodCounts(onespan=2, observe_ai=1, total=3)),
        ("2024-11-1", PeriodCounts(freshworks=1, total=1)),
    ]


def test_filtered_analytics_by_brand_and_platform(store, clock):
    async def scenario(portal):
        await submit_across_two_months(portal, clock)
        by_brand = await portal.get_filtered_analytics(
            WHOLE_RANGE.model_copy(update={"granularity": Granularity.MONTH}), brand=Brand.AMAXTX,
        )
        by_platform = await portal.get_filtered_analytics(
            WHOLE_RANGE.model_copy(update={"granularity": Granularity.WEEK}), platform=Platform.ONESPAN,
        )
        nothing = await portal.get_filtered_analytics(WHOLE_RANGE, brand=Brand.AMAXCA)
        return by_brand, by_platform, nothing

    by_brand, by_platform, nothing = run_with_client(store, scenario)

    assert by_brand.periods == [
        ("2024-10-1", PeriodCounts(onespan=2, total=2)),
        ("2024-11-1", PeriodCounts(freshworks=1, total=1)),
    ]
    assert by_platform.periods == [("2024-10-13", PeriodCounts(onespan=2, total=2))]
    assert nothing.periods == []


def test_platform_distribution_percentages(store, clock):
    async def scenario(portal):
        await submit_across_two_months(portal, clock)
        return (
            await portal.get_ticket_analytics(WHOLE_RANGE),
            await portal.get_filtered_analytics(WHOLE_RANGE, brand=Brand.ALPA),
        )

    analytics, alpa_only = run_with_client(store, scenario)

    assert platform_distribution(analytics) == [
        PlatformShare(platform=Platform.ONESPAN, count=2, percentage=50.0),
        PlatformShare(platform=Platform.OBSERVE_AI, count=1, percentage=25.0),
        PlatformShare(platform=Platform.FRESHWORKS, count=1, percentage=25.0),
    ]
    assert platform_distribution(alpa_only) == [
        PlatformShare(platform=Platform.OBSERVE_AI, count=1, percentage=100.0),
    ]


def test_platform_distribution_of_empty_window_is_empty(store):
    async def scenario(portal):
        return await portal.get_ticket_analytics(AnalyticsRequest(start_time=0, end_time=1))

    analytics = run_with_client(store, scenario)

    assert [counts.total for _, counts in analytics.periods] == [0]
    assert platform_distribution(analytics) == []


def test_display_counters_through_client(store):
    async def scenario(portal):
        await portal.submit_ticket(make_ticket(platform=Platform.FRESHWORKS))
        return await portal.get_display_counters()

    counters = run_with_client(store, scenario)

    assert counters == {Platform.ONESPAN: 1, Platform.OBSERVE_AI: 1, Platform.FRESHWORKS: 2}


def test_create_app_routes():
    app = create_app()
    paths = {route.path for route in app.routes}
    assert {"/health", "/mcp"} <= paths


def test_health_endpoint():
    response = TestClient(create_app()).get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
