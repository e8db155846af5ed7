# io/recorder.py
"""
Destinations for built records.

A Recorder fans each record out to its sinks and keeps a per-type tally, so a
batch can report how many Geometry / Reference / Intersection / Metadata
records left the process.
"""

import json
import sys
from collections import Counter
from collections.abc import Iterable
from dataclasses import asdict
from typing import Protocol


class Sink(Protocol):
    def write(self, rec) -> None: ...


class JsonlSink:
    """One JSON object per line; ``type`` names the record class and comes first."""

    def __init__(self, fp=None):
        self.fp = fp or sys.stdout

    @staticmethod
    def encode(rec) -> str:
        row = {"type": type(rec).__name__}
        row.update(asdict(rec))
        return json.dumps(row)

    def write(self, rec) -> None:
        self.fp.write(self.encode(rec) + "\n")


class MemorySink:
    def __init__(self):
        self.records: list = []

    def write(self, rec) -> None:
        self.records.append(rec)


class Recorder:
    def __init__(self, *sinks: Sink):
        self.sinks = sinks or (JsonlSink(),)
        self.counts: Counter[str] = Counter()

    def emit(self, rec) -> None:
        self.counts[type(rec).__name__] += 1
        for s in self.sinks:
            s.write(rec)

    def emit_all(self, records: Iterable) -> int:
        n = 0
        for rec in records:
            self.emit(rec)
            n += 1
        return n
