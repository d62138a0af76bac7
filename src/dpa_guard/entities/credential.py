"""Access credential domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Credential:
    """Bearer token for the list endpoint.

    Expiry is not tracked; a stale token is only discovered when the
    endpoint answers 401.
    """

    access_token: str

    @property
    def authorization_header(self) -> str:
        return f"Bearer {self.access_token}"
