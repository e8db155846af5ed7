# app/hooks.py
from typing import Protocol

from sharedstreets.domain.entities.records import Geometry


class BuildHooks(Protocol):
    def batch_start(self, *, run_id, features): ...
    def batch_end(self, *, built, skipped, duplicates, intersections, wall_ms): ...
    def feature_built(self, geom: Geometry, *, index, records): ...
    def error(self, *, index, exc: BaseException): ...


class NoopHooks:
    def batch_start(self, **_):
        pass

    def batch_end(self, **_):
        pass

    def feature_built(self, *_, **__):
        pass

    def error(self, **_):
        pass
