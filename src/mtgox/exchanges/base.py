from typing import Any, Mapping, Optional, Protocol


class ITransport(Protocol):
    """
    The only thing the client needs from the network.

    GET is public; POST is a private (signed) call. Implementations raise
    TransportError / NotFound for HTTP trouble and RemoteError when the
    payload itself reports a failure. Retries, if any, happen in here.
    """

    name: str

    def request(
        self, method: str, path: str, params: Optional[Mapping[str, Any]] = None
    ) -> Any: ...
