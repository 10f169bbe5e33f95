"""Domain error taxonomy shared by services and routers."""

from __future__ import annotations


class DroneCRMError(Exception):
    """Base class for errors surfaced to the user as a notification."""


class ProviderUnavailable(DroneCRMError):
    """The weather provider failed or returned no usable data."""


class NotFound(DroneCRMError):
    """A location or record identity could not be resolved."""

    def __init__(self, resource: str, identifier: object) -> None:
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")

    @property
    def detail(self) -> str:
        return f"{self.resource}_not_found"


__all__ = ["DroneCRMError", "ProviderUnavailable", "NotFound"]
