"""Outcomes of best-effort lookups.

Callers that treat "no record" as a normal branch get one of these instead of
an exception, and branch with isinstance().
"""
from dataclasses import dataclass
from typing import Any, Dict, Union


@dataclass(frozen=True)
class Found:
    record: Dict[str, Any]


@dataclass(frozen=True)
class NotFound:
    pass


@dataclass(frozen=True)
class StoreFailure:
    error: str


Lookup = Union[Found, NotFound, StoreFailure]
