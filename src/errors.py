"""
Error taxonomy for adventure generation.

Every failure of a turn is one of these. Each carries a short notice that is
shown to the user and recorded in the conversation transcript.
"""


class AdventureRequestError(Exception):
    """Base class for failures of a single generation request."""

    notice = "Sorry, I couldn't generate adventures. Please try again."

    def __init__(self, detail: str = ""):
        super().__init__(detail or self.notice)
        self.detail = detail


class RateLimited(AdventureRequestError):
    """The generation service says we are sending requests too fast."""

    notice = "Too many requests! Please wait a moment and try again."


class QuotaExhausted(AdventureRequestError):
    """The account's generation credits are used up."""

    notice = "AI credits depleted. Please add credits to continue."


class UpstreamError(AdventureRequestError):
    """Any other non-success response, transport failure or timeout."""


class EmptyResponse(AdventureRequestError):
    """The service answered but gave us nothing to work with."""

    notice = (
        "Sorry, I didn't get any ideas back that time. Please try again."
    )


class MalformedResponse(AdventureRequestError):
    """The model's output could not be read as a batch of adventures."""

    notice = (
        "Sorry, I couldn't make sense of the plans I came up with. "
        "Please try again."
    )


class ConversationBusy(Exception):
    """A request is already in flight for this conversation."""
