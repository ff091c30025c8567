"""Operations ticketing portal: ticket and Help Center store served over MCP."""

from ticket_portal.store import PortalStore

__all__ = ["PortalStore"]
