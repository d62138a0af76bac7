"""DPA list entry domain entity."""

from dataclasses import dataclass, field
from typing import Any

_KNOWN_FIELDS = ("resource_link", "software_name", "current_tl_status", "current_dpa_status")


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


@dataclass(frozen=True)
class ListEntry:
    """One resource from the remote DPA list.

    Owned by the remote source and read-only here. Identity is the URL in
    ``resource_link``.

    Attributes:
        resource_link: URL of the resource (website or storefront listing)
        software_name: Human readable name of the resource
        current_tl_status: Teaching & Learning approval status
        current_dpa_status: Data Processing Agreement status
        extra: Any other fields sent by the remote source
    """

    resource_link: str | None
    software_name: str | None = None
    current_tl_status: str | None = None
    current_dpa_status: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ListEntry":
        """Build an entry from one object of the remote JSON array."""
        return cls(
            resource_link=_optional_str(data.get("resource_link")),
            software_name=_optional_str(data.get("software_name")),
            current_tl_status=_optional_str(data.get("current_tl_status")),
            current_dpa_status=_optional_str(data.get("current_dpa_status")),
            extra={k: v for k, v in data.items() if k not in _KNOWN_FIELDS},
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the entry in its wire shape, extra fields included."""
        data = dict(self.extra)
        data.update(
            resource_link=self.resource_link,
            software_name=self.software_name,
            current_tl_status=self.current_tl_status,
            current_dpa_status=self.current_dpa_status,
        )
        return data
