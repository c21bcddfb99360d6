"""HTTP primitives: immutable headers, request, and response."""

from garden.http.headers import Headers
from garden.http.request import Request
from garden.http.response import Response, json_response

__all__ = ["Headers", "Request", "Response", "json_response"]
