"""Request middleware.

A middleware is any async callable ``(request, next) -> Response``.
"""

from garden.middleware.cors import CORSConfig, CORSMiddleware
from garden.middleware.protocol import Middleware, Next

__all__ = ["CORSConfig", "CORSMiddleware", "Middleware", "Next"]
