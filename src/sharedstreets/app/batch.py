# app/batch.py
import time
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

from sharedstreets.app.builders import geometry_with_references, intersection, metadata
from sharedstreets.app.hooks import BuildHooks, NoopHooks
from sharedstreets.config.models import BatchModel
from sharedstreets.domain.coords import get_properties
from sharedstreets.domain.entities.records import Geometry, Intersection, Metadata, Reference
from sharedstreets.errors import InvalidGeometry, SharedStreetsError


@dataclass
class _Node:
    lon: float
    lat: float
    node_id: str = ""
    inbound: list[str] = field(default_factory=list)
    outbound: list[str] = field(default_factory=list)


@dataclass
class BuildResult:
    geometries: list[Geometry] = field(default_factory=list)
    references: list[Reference] = field(default_factory=list)
    intersections: list[Intersection] = field(default_factory=list)
    metadata: list[Metadata] = field(default_factory=list)
    skipped: int = 0
    duplicates: int = 0

    def records(self) -> Iterator:
        yield from self.geometries
        yield from self.intersections
        yield from self.references
        yield from self.metadata


def iter_features(source) -> Iterator:
    """Features of a GeoJSON FeatureCollection, or the items of any other iterable."""
    if isinstance(source, Mapping):
        if source.get("type") != "FeatureCollection":
            raise InvalidGeometry(f"expected a FeatureCollection, got {source.get('type')!r}")
        yield from source.get("features") or ()
    else:
        yield from source


def _node_ids(properties, key: str | None) -> tuple[str, str]:
    if key is None:
        return "", ""
    v = properties.get(key)
    if isinstance(v, (list, tuple)) and len(v) == 2:
        return ("" if v[0] is None else str(v[0]), "" if v[1] is None else str(v[1]))
    return "", ""


def build_collection(
    source: Mapping | Iterable,
    cfg: BatchModel | Mapping | None = None,
    *,
    hooks: BuildHooks | None = None,
) -> BuildResult:
    """
    Build every record for a set of lines: geometries, both references per
    geometry, deduplicated intersections and per-geometry metadata.

    Lines whose geometry id was already built are counted as duplicates.
    Invalid lines raise unless ``skip_invalid`` is set.
    """
    model = cfg if isinstance(cfg, BatchModel) else BatchModel.model_validate(cfg or {})
    hooks = hooks or NoopHooks()
    features = list(iter_features(source))

    t0 = time.perf_counter()
    hooks.batch_start(run_id=model.run_id, features=len(features))
    out = BuildResult()
    seen: set[str] = set()
    nodes: dict[str, _Node] = {}

    for i, feature in enumerate(features):
        try:
            geom, forward, back = geometry_with_references(feature, model.geometry)
        except SharedStreetsError as exc:
            hooks.error(index=i, exc=exc)
            if not model.skip_invalid:
                raise
            out.skipped += 1
            continue
        if geom.id in seen:
            out.duplicates += 1
            continue
        seen.add(geom.id)

        properties = get_properties(feature)
        from_node, to_node = _node_ids(properties, model.node_id_key)
        start, end = forward.location_references
        for lr, node_id, inbound, outbound in (
            (start, from_node, back.id, forward.id),
            (end, to_node, forward.id, back.id),
        ):
            n = nodes.setdefault(lr.intersection_id, _Node(lr.lon, lr.lat))
            n.node_id = n.node_id or node_id
            n.inbound.append(inbound)
            n.outbound.append(outbound)

        gis = [{"source": model.run_id, "sections": [properties]}] if properties else None
        meta = metadata(geom, gis_metadata=gis)

        out.geometries.append(geom)
        out.references += [forward, back]
        out.metadata.append(meta)
        hooks.feature_built(geom, index=i, records=(geom, forward, back, meta))

    out.intersections = [
        intersection(
            [n.lon, n.lat],
            node_id=n.node_id,
            inbound_references=n.inbound,
            outbound_references=n.outbound,
        )
        for n in nodes.values()
    ]
    hooks.batch_end(
        built=len(out.geometries),
        skipped=out.skipped,
        duplicates=out.duplicates,
        intersections=len(out.intersections),
        wall_ms=(time.perf_counter() - t0) * 1000,
    )
    return out
