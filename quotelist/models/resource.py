"""Normalized resource item returned to callers."""

from pydantic import BaseModel, ConfigDict

from ..core.enums import DeliveryType, ResourceType


class ResourceItem(BaseModel):
    """One asset in a listing page.

    ``created_at``, ``bytes``, ``format`` and ``filename`` are passed through
    from the upstream record as-is and may be missing.
    """

    id: str
    public_id: str | None = None
    created_at: str | None = None
    bytes: int | None = None
    format: str | None = None
    filename: str | None = None
    resource_type: ResourceType
    type: DeliveryType
    link: str

    model_config = ConfigDict(frozen=True)

    def to_payload(self) -> dict:
        """JSON-ready dict in response field order."""
        return {
            "id": self.id,
            "public_id": self.public_id,
            "created_at": self.created_at,
            "bytes": self.bytes,
            "format": self.format,
            "filename": self.filename,
            "resource_type": self.resource_type.value,
            "type": self.type.value,
            "link": self.link,
        }
