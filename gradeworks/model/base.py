import pydantic as p


class BaseModel(p.BaseModel):
    # aliased fields (e.g. the "()" and "class" keys of a dictConfig document)
    # must round-trip through model_dump() unchanged
    model_config = p.ConfigDict(serialize_by_alias=True)


class Record(BaseModel):
    """Immutable snapshot exchanged with the persistence layer."""

    model_config = p.ConfigDict(frozen=True)
