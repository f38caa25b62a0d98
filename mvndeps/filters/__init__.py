"""Composable predicates over dependency nodes and artifacts."""

from typing import Callable, Optional, TypeVar

from .dest_file import DestFileFilter
from .include_exclude import IncludeExcludeFilter
from .reactor import ExcludeReactorProjectsFilter
from .scope import SCOPES, ScopeFilter, get_scopes
from .strict_pattern import StrictPatternArtifactFilter

T = TypeVar('T')

Predicate = Callable[[T], bool]


def combine(current: Optional[Predicate], with_: Predicate) -> Predicate:
    """Chain ``with_`` after ``current``; the first predicate of a chain stands alone."""
    if current is None:
        return with_
    return lambda value: current(value) and with_(value)


__all__ = [
    'SCOPES',
    'DestFileFilter',
    'ExcludeReactorProjectsFilter',
    'IncludeExcludeFilter',
    'ScopeFilter',
    'StrictPatternArtifactFilter',
    'combine',
    'get_scopes',
]
