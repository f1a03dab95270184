import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel

from schemas.blend import Blend, BlendProportion
from schemas.blend_component import BlendComponent, BlendDetail
from schemas.capacity import Capacity, CapacityValidation
from schemas.commodity import Commodity
from schemas.counter_party import CounterParty
from schemas.dashboard import CatalogStats
from schemas.location import Location, LocationDetail
from schemas.uom import UOM, UOMRef
from .collection import Collection

logger = logging.getLogger(__name__)

# Set by the store only; client-supplied values are dropped
SERVER_FIELDS = frozenset({"id", "created_at", "updated_at"})


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _format_percent(value: Decimal) -> str:
    if value == value.to_integral_value():
        return str(int(value))
    return format(value.normalize(), "f")


@dataclass(frozen=True)
class Reference:
    """A foreign key whose target gets embedded in the referencing record."""
    foreign_key: str
    embed: str
    resolve: Callable[[Optional[int]], Optional[BaseModel]]


class CatalogStore:
    """In-memory catalog of the seven reference-data collections.

    Records referencing a UOM, commodity, blend or location carry a
    point-in-time snapshot of the referenced record, taken when the
    referencing record is created or saved with that foreign key. The
    ``*_details`` reads resolve the same references against live data.

    Lookups that miss return ``None``; deletes report whether anything was
    removed and never fail.
    """

    def __init__(self):
        self.uoms = Collection("uoms", UOM)
        self.commodities = Collection("commodities", Commodity)
        self.locations = Collection("locations", Location)
        self.counter_parties = Collection("counter_parties", CounterParty)
        self.blends = Collection("blends", Blend)
        self.blend_components = Collection("blend_components", BlendComponent)
        self.capacity = Collection("capacity", Capacity)

        self._references: Dict[str, tuple] = {
            "commodities": (
                Reference("uom_id", "uom", self._uom_snapshot),
            ),
            "blend_components": (
                Reference("component_commodity_id", "commodity", self._commodity_snapshot),
                Reference("blend_id", "blend", self._blend_snapshot),
            ),
            "capacity": (
                Reference("commodity_id", "commodity", self._commodity_snapshot),
                Reference("location_id", "location", self._location_snapshot),
            ),
        }

    # Snapshots

    def _uom_snapshot(self, uom_id: Optional[int]) -> Optional[UOMRef]:
        uom = self.uoms.get(uom_id)
        return UOMRef(id=uom.id, name=uom.name) if uom else None

    def _commodity_snapshot(self, commodity_id: Optional[int]) -> Optional[Commodity]:
        commodity = self.commodities.get(commodity_id)
        return commodity.model_copy(deep=True) if commodity else None

    def _blend_snapshot(self, blend_id: Optional[int]) -> Optional[Blend]:
        blend = self.blends.get(blend_id)
        return blend.model_copy(deep=True) if blend else None

    def _location_snapshot(self, location_id: Optional[int]) -> Optional[Location]:
        location = self.locations.get(location_id)
        return location.model_copy(deep=True) if location else None

    # Generic CRUD

    def _references_of(self, collection: Collection) -> tuple:
        return self._references.get(collection.name, ())

    def _create(self, collection: Collection, data: Mapping[str, Any]):
        references = self._references_of(collection)
        embeds = {ref.embed for ref in references}
        fields = {
            k: v for k, v in dict(data).items()
            if v is not None and k not in SERVER_FIELDS and k not in embeds
        }
        fields.setdefault("is_active", True)
        for ref in references:
            fields[ref.embed] = ref.resolve(fields.get(ref.foreign_key))
        fields["created_at"] = _now()

        record = collection.insert(fields)
        logger.debug("created %s id=%s", collection.name, record.id)
        return record

    def _update(self, collection: Collection, record_id: int, data: Mapping[str, Any]):
        current = collection.get(record_id)
        if current is None:
            return None

        model_fields = collection.model.model_fields
        references = self._references_of(collection)
        embeds = {ref.embed for ref in references}
        fields: Dict[str, Any] = {}
        for key, value in dict(data).items():
            if key in SERVER_FIELDS or key in embeds or key not in model_fields:
                continue
            # null only clears attributes that are nullable to begin with
            if value is None and model_fields[key].default is not None:
                continue
            fields[key] = value

        for ref in references:
            if ref.foreign_key not in fields:
                continue
            snapshot = ref.resolve(fields[ref.foreign_key])
            # a lookup miss keeps the snapshot already embedded
            if snapshot is not None:
                fields[ref.embed] = snapshot

        values = dict(current)
        values.update(fields)
        values["updated_at"] = _now()
        record = collection.model.model_validate(values)
        collection.replace(record)
        logger.debug("updated %s id=%s fields=%s", collection.name, record_id, sorted(fields))
        return record

    def _delete(self, collection: Collection, record_id: int) -> bool:
        removed = collection.remove(record_id)
        if removed:
            logger.debug("deleted %s id=%s", collection.name, record_id)
        return removed

    def _with_live_references(self, collection: Collection, record):
        return record.model_copy(update={
            ref.embed: ref.resolve(getattr(record, ref.foreign_key))
            for ref in self._references_of(collection)
        })

    # UOMs

    def list_uoms(self) -> List[UOM]:
        return self.uoms.all()

    def get_uom(self, uom_id: int) -> Optional[UOM]:
        return self.uoms.get(uom_id)

    def create_uom(self, data: Mapping[str, Any]) -> UOM:
        return self._create(self.uoms, data)

    def update_uom(self, uom_id: int, data: Mapping[str, Any]) -> Optional[UOM]:
        return self._update(self.uoms, uom_id, data)

    def delete_uom(self, uom_id: int) -> bool:
        return self._delete(self.uoms, uom_id)

    # Commodities

    def list_commodities(self) -> List[Commodity]:
        return self.commodities.all()

    def get_commodity(self, commodity_id: int) -> Optional[Commodity]:
        return self.commodities.get(commodity_id)

    def create_commodity(self, data: Mapping[str, Any]) -> Commodity:
        return self._create(self.commodities, data)

    def update_commodity(self, commodity_id: int, data: Mapping[str, Any]) -> Optional[Commodity]:
        return self._update(self.commodities, commodity_id, data)

    def delete_commodity(self, commodity_id: int) -> bool:
        return self._delete(self.commodities, commodity_id)

    def commodity_details(self, commodity_id: int) -> Optional[Commodity]:
        commodity = self.commodities.get(commodity_id)
        if commodity is None:
            return None
        return self._with_live_references(self.commodities, commodity)

    # Locations

    def list_locations(self) -> List[Location]:
        return self.locations.all()

    def get_location(self, location_id: int) -> Optional[Location]:
        return self.locations.get(location_id)

    def create_location(self, data: Mapping[str, Any]) -> Location:
        return self._create(self.locations, data)

    def update_location(self, location_id: int, data: Mapping[str, Any]) -> Optional[Location]:
        return self._update(self.locations, location_id, data)

    def delete_location(self, location_id: int) -> bool:
        return self._delete(self.locations, location_id)

    def location_details(self, location_id: int) -> Optional[LocationDetail]:
        location = self.locations.get(location_id)
        if location is None:
            return None
        return LocationDetail(
            location=location,
            counterparty=self.counter_parties.get(location.counterparty_id),
        )

    # Counter parties

    def list_counter_parties(self) -> List[CounterParty]:
        return self.counter_parties.all()

    def get_counter_party(self, counter_party_id: int) -> Optional[CounterParty]:
        return self.counter_parties.get(counter_party_id)

    def create_counter_party(self, data: Mapping[str, Any]) -> CounterParty:
        return self._create(self.counter_parties, data)

    def update_counter_party(self, counter_party_id: int, data: Mapping[str, Any]) -> Optional[CounterParty]:
        return self._update(self.counter_parties, counter_party_id, data)

    def delete_counter_party(self, counter_party_id: int) -> bool:
        return self._delete(self.counter_parties, counter_party_id)

    # Blends

    def list_blends(self) -> List[Blend]:
        return self.blends.all()

    def get_blend(self, blend_id: int) -> Optional[Blend]:
        return self.blends.get(blend_id)

    def create_blend(self, data: Mapping[str, Any]) -> Blend:
        return self._create(self.blends, data)

    def create_blend_with_components(
        self,
        data: Mapping[str, Any],
        components: Iterable[Mapping[str, Any]],
    ) -> Blend:
        """Create a blend and one component per entry.

        Not atomic: components created before a failing one stay in place.
        """
        blend = self.create_blend({k: v for k, v in dict(data).items() if k != "components"})
        for component in components:
            self.create_blend_component({
                "blend_id": blend.id,
                "component_commodity_id": component.get("component_commodity_id"),
                "percentage": component.get("percentage"),
                "is_active": True,
            })
        return blend

    def update_blend(self, blend_id: int, data: Mapping[str, Any]) -> Optional[Blend]:
        return self._update(self.blends, blend_id, data)

    def delete_blend(self, blend_id: int) -> bool:
        removed = self._delete(self.blends, blend_id)
        cascaded = self.blend_components.remove_where(lambda c: c.blend_id == blend_id)
        if cascaded:
            logger.debug("deleted %s components of blend id=%s", cascaded, blend_id)
        return removed

    def blend_details(self, blend_id: int) -> Optional[BlendDetail]:
        blend = self.blends.get(blend_id)
        if blend is None:
            return None
        return BlendDetail(
            blend=blend,
            commodity=self.commodities.get(blend.commodity_id),
            components=[
                self._with_live_references(self.blend_components, c)
                for c in self.list_blend_components_by_blend(blend_id)
            ],
            proportion=self.validate_blend_proportion(blend_id),
        )

    # Blend components

    def list_blend_components(self) -> List[BlendComponent]:
        return self.blend_components.all()

    def list_blend_components_by_blend(self, blend_id: int) -> List[BlendComponent]:
        return self.blend_components.filter(lambda c: c.blend_id == blend_id)

    def get_blend_component(self, component_id: int) -> Optional[BlendComponent]:
        return self.blend_components.get(component_id)

    def create_blend_component(self, data: Mapping[str, Any]) -> BlendComponent:
        return self._create(self.blend_components, data)

    def update_blend_component(self, component_id: int, data: Mapping[str, Any]) -> Optional[BlendComponent]:
        return self._update(self.blend_components, component_id, data)

    def delete_blend_component(self, component_id: int) -> bool:
        return self._delete(self.blend_components, component_id)

    def blend_component_details(self, component_id: int) -> Optional[BlendComponent]:
        component = self.blend_components.get(component_id)
        if component is None:
            return None
        return self._with_live_references(self.blend_components, component)

    # Capacity

    def list_capacity(self) -> List[Capacity]:
        return self.capacity.all()

    def get_capacity(self, capacity_id: int) -> Optional[Capacity]:
        return self.capacity.get(capacity_id)

    def create_capacity(self, data: Mapping[str, Any]) -> Capacity:
        return self._create(self.capacity, data)

    def update_capacity(self, capacity_id: int, data: Mapping[str, Any]) -> Optional[Capacity]:
        return self._update(self.capacity, capacity_id, data)

    def delete_capacity(self, capacity_id: int) -> bool:
        return self._delete(self.capacity, capacity_id)

    def capacity_details(self, capacity_id: int) -> Optional[Capacity]:
        capacity = self.capacity.get(capacity_id)
        if capacity is None:
            return None
        return self._with_live_references(self.capacity, capacity)

    # Validation

    def validate_blend_proportion(self, blend_id: int) -> BlendProportion:
        """Check that the blend's component percentages add up to exactly 100.

        Percentages are summed as decimals built from their shortest repr,
        so 33.33 + 33.33 + 33.34 is exactly 100.
        """
        total = sum(
            (Decimal(str(c.percentage)) for c in self.list_blend_components_by_blend(blend_id)),
            Decimal(0),
        )
        valid = total == 100
        message = "Valid" if valid else f"Total is {_format_percent(total)}%, should be 100%"
        return BlendProportion(valid=valid, total=float(total), message=message)

    def validate_capacity(self, data: Mapping[str, Any]) -> CapacityValidation:
        # no capacity rules yet
        return CapacityValidation(valid=True, errors=[])

    def stats(self) -> CatalogStats:
        return CatalogStats(
            uoms=len(self.uoms),
            commodities=len(self.commodities),
            locations=len(self.locations),
            counter_parties=len(self.counter_parties),
            blends=len(self.blends),
            blend_components=len(self.blend_components),
            capacity=len(self.capacity),
        )
