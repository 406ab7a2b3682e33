"""Protocol definitions for NutriCart collaborators and rule stages."""

from typing import Any, Optional, Protocol, runtime_checkable

from nutricart.core.models import InventoryItem, Suggestion


@runtime_checkable
class Clock(Protocol):
    """Supplies "now" to every time-relative rule."""

    def now(self) -> int:
        """
        Return the current instant.

        Returns:
            Milliseconds since the Unix epoch
        """
        ...


@runtime_checkable
class IdSupplier(Protocol):
    """Produces identifiers for new list items."""

    def next_id(self) -> str:
        """
        Return a new identifier.

        The value must be unique among ids that are live in the session;
        the algorithm is up to the implementation.
        """
        ...


@runtime_checkable
class StateStore(Protocol):
    """
    Opaque key-value persistence for serialized household state.

    Keys are fixed logical names ('current_list', 'current_inventory') and
    values are lists of plain records produced by `nutricart.core.codec`.
    """

    def load(self, key: str) -> Optional[list[dict[str, Any]]]:
        """
        Load the records stored under `key`.

        Returns:
            The records, or None if nothing usable is stored
        """
        ...

    def save(self, key: str, records: list[dict[str, Any]]) -> None:
        """Replace the records stored under `key`."""
        ...


@runtime_checkable
class ExpiryEstimatorProtocol(Protocol):
    """Maps an item name to an estimated expiry timestamp."""

    def estimate(self, name: str, purchased_at: int) -> int:
        """
        Estimate when an item bought at `purchased_at` will expire.

        Args:
            name: Free-text item name
            purchased_at: Purchase timestamp (ms)

        Returns:
            Expiry timestamp (ms), never earlier than `purchased_at`
        """
        ...


@runtime_checkable
class ExpiringDetector(Protocol):
    """Flags current stock that is expired or close to expiring."""

    def detect(self, inventory: list[InventoryItem]) -> list[Suggestion]:
        ...


@runtime_checkable
class RebuyDetectorProtocol(Protocol):
    """Flags consumed items that are probably due for repurchase."""

    def detect(
        self, inventory: list[InventoryItem], active_list_names: list[str]
    ) -> list[Suggestion]:
        ...
