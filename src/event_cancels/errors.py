class CancelsError(Exception):
    """Base error of the event cancels service."""


class GatewayError(CancelsError):
    """A persistence command could not be delivered or was never acknowledged."""

    def __init__(self, function: str, session_id: str, reason: str):
        self.function = function
        self.session_id = session_id
        self.reason = reason
        super().__init__(
            f"rmq error: function={function}, runtime_session_id={session_id}: {reason}"
        )


class RequestDecodeError(CancelsError):
    """The incoming cancel request does not match the expected schema."""
