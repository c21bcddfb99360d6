"""Garden exception hierarchy.

Shared across the server pipeline and handlers so every module raises
and catches the same types. Client-side code never raises these: it
reduces failures to a ``Result``.
"""

from dataclasses import dataclass


class GardenError(Exception):
    """Base for all garden-specific errors."""


class ConfigurationError(GardenError):
    """Raised when configuration is invalid (unknown environment, bad port)."""


@dataclass(frozen=True, slots=True)
class HTTPError(GardenError):
    """An error that maps directly to an HTTP status code.

    The request pipeline catches these and answers with a JSON
    ``{"success": false, "message": detail}`` body.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class BadRequest(HTTPError):  # noqa: N818
    """400: the request body could not be understood."""

    def __init__(self, detail: str = "Bad Request") -> None:
        super().__init__(status=400, detail=detail)
