import pytest

from ticket_portal.dates import NANOS_PER_DAY
from ticket_portal.schema import Brand, NewTicket, Platform
from ticket_portal.store import PortalStore

# 2024-10-18 in the portal's simplified calendar.
DAY_ZERO = 20_000 * NANOS_PER_DAY


class StepClock:
    """Deterministic clock: each reading is one second after the previous one."""

    def __init__(self, start: int = DAY_ZERO, step: int = 1_000_000_000) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> int:
        reading = self.now
        self.now += self.step
        return reading

    def jump(self, nanos: int) -> None:
        self.now += nanos


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def store(clock: StepClock) -> PortalStore:
    return PortalStore(clock=clock)


def make_ticket(**overrides) -> NewTicket:
    fields = {
        "platform": Platform.ONESPAN,
        "brand": Brand.AMAXTX,
        "issue_description": "Document will not load",
        "office_name": "Dallas North",
        "agent_name": "Robin Gray",
        "employee_id": "12345",
        "email": "robin.gray@example.com",
    }
    fields.update(overrides)
    return NewTicket(**fields)
