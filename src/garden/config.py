"""Server and front-end environment configuration.

AppConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups. EnvironmentProfile does the same for the
per-hostname settings the front end picks at startup.
"""

import logging
from dataclasses import dataclass

from garden.errors import ConfigurationError

logger = logging.getLogger("garden.config")


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Server configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(port=3000, log_level="debug")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 9090
    debug: bool = False

    # Service descriptor
    name: str = "Digital Garden Blog API Server"
    version: str = "1.0.0"

    # CORS
    cors_allow_origins: tuple[str, ...] = ("*",)
    cors_allow_methods: tuple[str, ...] = ("GET", "POST", "OPTIONS")
    cors_allow_headers: tuple[str, ...] = ("Content-Type", "Authorization")

    # Logging
    log_level: str = "info"

    def __post_init__(self) -> None:
        if not 0 <= self.port <= 65535:
            msg = f"port must be between 0 and 65535, got {self.port}"
            raise ConfigurationError(msg)


@dataclass(frozen=True, slots=True)
class EnvironmentProfile:
    """Front-end settings for one hosting environment."""

    name: str
    api_base_url: str
    app_name: str
    debug: bool = False
    demo_mode: bool = False


PROFILES: dict[str, EnvironmentProfile] = {
    "development": EnvironmentProfile(
        name="development",
        api_base_url="http://127.0.0.1:9090/api",
        app_name="Digital Garden Blog (Dev)",
        debug=True,
    ),
    "production": EnvironmentProfile(
        name="production",
        # Placeholder until a backend is deployed
        api_base_url="https://your-backend-api.com/api",
        app_name="Digital Garden Blog",
    ),
    "netlify": EnvironmentProfile(
        name="netlify",
        api_base_url="/api",
        app_name="Digital Garden Blog (Demo)",
        demo_mode=True,
    ),
}

_LOCAL_HOSTNAMES = ("localhost", "127.0.0.1")
_NETLIFY_SUFFIXES = ("netlify.app", "netlify.com")


def detect_environment(hostname: str) -> str:
    """Map a hostname to an environment name in ``PROFILES``."""
    if hostname in _LOCAL_HOSTNAMES:
        return "development"
    if any(suffix in hostname for suffix in _NETLIFY_SUFFIXES):
        return "netlify"
    return "production"


def get_profile(hostname: str) -> EnvironmentProfile:
    """Return the profile for *hostname*."""
    env = detect_environment(hostname)
    profile = PROFILES[env]
    logger.debug("Environment: %s %r", env, profile)
    return profile


def is_static_deployment(hostname: str) -> bool:
    """True when *hostname* is not a local dev host.

    Anything that is not local is assumed to be static hosting with no
    backend reachable, so the front end falls back to demo mode.
    """
    if not hostname:
        return False
    return not any(local in hostname for local in _LOCAL_HOSTNAMES)
