"""The single hardcoded identity.

There is no user table and no password hashing: one literal
username/password pair unlocks both the API server and demo mode.
"""

from dataclasses import asdict, dataclass
from typing import Any

USERNAME = "admin"
PASSWORD = "admin123"

SERVER_TOKEN = "fake-jwt-token-12345"


@dataclass(frozen=True, slots=True)
class User:
    """An authenticated identity as the front end sees it."""

    id: Any
    username: str
    email: str
    role: str = "admin"
    name: str = ""

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        if not self.name:
            del data["name"]
        return data

    @property
    def display_name(self) -> str:
        return self.name or self.username


SERVER_USER = User(id="1", username=USERNAME, email="admin@blog.com", role="admin")
DEMO_USER = User(id=1, username=USERNAME, email="admin@digitalgarden.com", name="Demo Admin")


def check_credentials(username: object, password: object) -> bool:
    """Literal comparison against the one known credential pair."""
    return username == USERNAME and password == PASSWORD


def user_from_dict(data: dict[str, Any]) -> User:
    """Rebuild a User from a stored or received mapping."""
    return User(
        id=data.get("id"),
        username=str(data.get("username") or ""),
        email=str(data.get("email") or ""),
        role=str(data.get("role") or "admin"),
        name=str(data.get("name") or ""),
    )
