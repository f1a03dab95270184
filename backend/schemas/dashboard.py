from pydantic import BaseModel


class CatalogStats(BaseModel):
    uoms: int
    commodities: int
    locations: int
    counter_parties: int
    blends: int
    blend_components: int
    capacity: int
