"""Exceptions raised by the portal store and its client."""


class PortalError(Exception):
    pass


class TicketNotFoundError(PortalError, LookupError):
    """A mutation named a ticket id the store has never issued."""

    def __init__(self, ticket_id: int) -> None:
        super().__init__(f"No ticket found with ID: {ticket_id}")
        self.ticket_id = ticket_id


class PortalCallError(PortalError):
    """The server answered a tool call with an error result."""

    def __init__(self, tool: str, message: str) -> None:
        super().__init__(f"{tool} failed: {message}")
        self.tool = tool
        self.message = message
