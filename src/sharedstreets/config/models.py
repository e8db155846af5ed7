from collections.abc import Mapping
from typing import Any, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False
    sample_every: int = Field(default=1, ge=1)


# ----------------- BUILDER OPTIONS ---------------------


class GeometryOptions(BaseModel):
    """Names of the feature properties holding the classifications (number or string values)."""

    model_config = ConfigDict(extra="forbid")
    form_of_way: str | None = None
    road_class: str | None = None


class IntersectionOptions(BaseModel):
    model_config = ConfigDict(extra="forbid")
    node_id: str = ""
    inbound_references: list[str] = Field(default_factory=list)
    outbound_references: list[str] = Field(default_factory=list)

    @field_validator("node_id", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return "" if v is None else str(v)

    @field_validator("inbound_references", "outbound_references", mode="before")
    @classmethod
    def _to_ids(cls, v):
        # Reference records or plain id strings
        if v is None:
            return []
        if isinstance(v, str):
            raise ValueError("expected a list of references, got a single string")
        ids = []
        for ref in v:
            if isinstance(ref, str):
                ids.append(ref)
            elif isinstance(getattr(ref, "id", None), str):
                ids.append(ref.id)
            else:
                raise ValueError(f"expected a Reference or reference id, got {ref!r}")
        return ids


class LocationReferenceOptions(BaseModel):
    # outbound_bearing/distance_to_next_ref pairing is checked by LocationReference itself
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)
    intersection_id: str | None = None
    inbound_bearing: float | None = None
    outbound_bearing: float | None = None
    distance_to_next_ref: float | None = None


# ------------------------------------------------------------------


class BatchModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    run_id: str = "local"
    geometry: GeometryOptions = Field(default_factory=GeometryOptions)
    node_id_key: str | None = None  # property holding [from_node, to_node]
    skip_invalid: bool = False
    log: LogModel = LogModel()


M = TypeVar("M", bound=BaseModel)


def resolve_options(model: type[M], options: M | Mapping[str, Any] | None, overrides: dict) -> M:
    """Merge an options model (or mapping) with keyword overrides and validate the result."""
    if options is None and not overrides:
        return model()
    if isinstance(options, BaseModel):
        base = options.model_dump(exclude_unset=True)
    else:
        base = dict(options or {})
    return model.model_validate({**base, **overrides})
