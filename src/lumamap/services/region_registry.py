"""Region registry: the ordered, canonical list of authored regions."""

import logging
from collections.abc import Iterable, Sequence

from lumamap.exceptions import RegionNotFoundError
from lumamap.model_manager import ObserverManager
from lumamap.models import MIN_REGION_POINTS, Point, Region, RegionDefaults
from lumamap.protocols import EditEvent, EditObserver

logger = logging.getLogger(__name__)


class RegionRegistry:
    """
    Owns the list of regions and applies create/update/delete.

    Every mutation emits an EditEvent so the renderer, the interaction
    state machine and any persistence layer stay in sync without manual
    coordination. Regions are handed out by reference: callers mutate a
    region in place and then call `update` to publish the change.

    Dependency Injection:
        The defaults applied on `create` come from the caller (usually
        AppConfig.region_defaults) instead of being hardcoded.
    """

    def __init__(self, defaults: RegionDefaults | None = None, regions: Iterable[Region] = ()):
        """
        Initialize the registry.

        Args:
            defaults: Configuration for newly created regions
            regions: Initial regions, in draw order
        """
        self.defaults = defaults or RegionDefaults()
        self._regions: list[Region] = list(regions)
        self._created_count = len(self._regions)
        self._observers = ObserverManager[EditObserver](observer_type_name="edit")

    # =================================================================
    # Event System
    # =================================================================

    def register_observer(self, observer: EditObserver) -> None:
        self._observers.register(observer)

    def unregister_observer(self, observer: EditObserver) -> None:
        self._observers.unregister(observer)

    def _notify_observers(self, event: EditEvent, regions: list[Region]) -> None:
        self._observers.notify("on_edit_event", event, regions)

    # =================================================================
    # Queries
    # =================================================================

    def list(self) -> list[Region]:
        """Regions in draw order (a new list; the regions themselves are shared)."""
        return list(self._regions)

    def get(self, region_id: str) -> Region | None:
        """Find a region by id."""
        for region in self._regions:
            if region.id == region_id:
                return region
        return None

    def __len__(self) -> int:
        return len(self._regions)

    def __contains__(self, region_id: object) -> bool:
        return isinstance(region_id, str) and self.get(region_id) is not None

    def _index_of(self, region_id: str, operation: str) -> int:
        for index, region in enumerate(self._regions):
            if region.id == region_id:
                return index
        raise RegionNotFoundError(region_id, operation)

    # =================================================================
    # Mutations
    # =================================================================

    def create(self, points: Sequence[Point]) -> Region:
        """
        Create a region from committed polygon points.

        Args:
            points: Vertices in winding order (at least three)

        Returns:
            The new Region, already appended to the list

        Raises:
            ValueError: If fewer than three points are given
        """
        if len(points) < MIN_REGION_POINTS:
            raise ValueError(
                f"A region needs at least {MIN_REGION_POINTS} points, got {len(points)}"
            )

        self._created_count += 1
        region = Region.from_points(list(points), self.defaults, number=self._created_count)
        self._regions.append(region)

        self._notify_observers(EditEvent.REGION_CREATED, [region])
        logger.info(f"Created region '{region.name}' ({region.id}) with {len(points)} points")
        return region

    def update(self, region: Region) -> None:
        """
        Replace the region with the same id.

        Raises:
            RegionNotFoundError: If no region has that id
        """
        index = self._index_of(region.id, "update")
        self._regions[index] = region
        self._notify_observers(EditEvent.REGION_UPDATED, [region])
        logger.debug(f"Updated region {region.id}")

    def delete(self, region_id: str) -> Region:
        """
        Remove a region.

        Returns:
            The removed Region

        Raises:
            RegionNotFoundError: If no region has that id
        """
        index = self._index_of(region_id, "delete")
        region = self._regions.pop(index)
        self._notify_observers(EditEvent.REGION_DELETED, [region])
        logger.info(f"Deleted region '{region.name}' ({region_id})")
        return region

    def replace_all(self, regions: Iterable[Region]) -> None:
        """Swap in a whole new list (e.g. when a project is opened)."""
        self._regions = list(regions)
        self._created_count = len(self._regions)
        self._notify_observers(EditEvent.REGIONS_REPLACED, self.list())
        logger.info(f"Loaded {len(self._regions)} region(s)")
