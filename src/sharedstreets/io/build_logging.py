# io/build_logging.py
import json
import logging
import sys

from sharedstreets.app.hooks import NoopHooks
from sharedstreets.io.recorder import Recorder


class JsonLineFormatter(logging.Formatter):
    """level, msg and logger, followed by the record's ``fields`` mapping."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {"level": record.levelname, "msg": record.getMessage(), "logger": record.name}
        fields = getattr(record, "fields", None)
        if isinstance(fields, dict):
            payload.update(fields)
        return json.dumps(payload, default=str)


def json_logger(name: str = "sharedstreets", level: str = "INFO", stream=None) -> logging.Logger:
    """
    Logger writing JSON lines to ``stream`` (stderr by default; stdout carries
    built records when run from the CLI). A handler is attached only once per
    logger name; later calls just adjust the level.
    """
    logger = logging.getLogger(name)
    if not any(isinstance(h.formatter, JsonLineFormatter) for h in logger.handlers):
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(JsonLineFormatter())
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger


class BuildLogging(NoopHooks):
    """
    Structured logs for a batch build, plus forwarding of every built record
    to an optional Recorder.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        sample_every: int = 1,
        logger: logging.Logger | None = None,
        recorder: Recorder | None = None,
    ):
        # a DEBUG level implies per-feature lines
        self.run_id, self.debug = run_id, debug or level == "DEBUG"
        self.sample_every = max(1, sample_every)
        self.recorder = recorder
        self.log = logger or json_logger(level=level)

    def _emit(self, level: str, msg: str, **fields):
        self.log.log(getattr(logging, level), msg, extra={"fields": {"run_id": self.run_id, **fields}})

    def batch_start(self, *, run_id, features):
        self._emit("INFO", "batch_start", features=features)

    def batch_end(self, *, built, skipped, duplicates, intersections, wall_ms):
        self._emit(
            "INFO",
            "batch_end",
            built=built,
            skipped=skipped,
            duplicates=duplicates,
            intersections=intersections,
            wall_ms=round(wall_ms, 3),
        )

    def feature_built(self, geom, *, index, records):
        if self.debug and (index % self.sample_every) == 0:
            self._emit(
                "DEBUG",
                "feature_built",
                index=index,
                geometry_id=geom.id,
                from_intersection_id=geom.from_intersection_id,
                to_intersection_id=geom.to_intersection_id,
                road_class=geom.road_class,
            )
        if self.recorder:
            for rec in records:
                self.recorder.emit(rec)

    def error(self, *, index, exc: BaseException):
        self._emit("ERROR", "feature_error", index=index, error=str(exc), kind=type(exc).__name__)
