"""Scope threshold filtering."""

from typing import Callable, FrozenSet, Generic, Optional, TypeVar

from ..exceptions import ConfigurationError

T = TypeVar('T')

COMPILE = "compile"
PROVIDED = "provided"
RUNTIME = "runtime"
SYSTEM = "system"
TEST = "test"

SCOPES = (COMPILE, PROVIDED, RUNTIME, SYSTEM, TEST)

# Scopes a classpath built for the given scope contains
_MEDIATION = {
    RUNTIME: frozenset({COMPILE, RUNTIME}),
    COMPILE: frozenset({COMPILE, PROVIDED, SYSTEM}),
    TEST: frozenset({COMPILE, PROVIDED, RUNTIME, SYSTEM, TEST}),
    PROVIDED: frozenset({PROVIDED}),
    SYSTEM: frozenset({SYSTEM}),
}


def get_scopes(scope: Optional[str], field: str = "scope") -> FrozenSet[str]:
    """
    Expand a scope threshold into the set of scopes it selects.

    ``field`` names the option the value came from in the error message.

    Raises:
        ConfigurationError: If the value is not one of the five Maven scopes
    """
    scope = (scope or "").strip()
    if not scope:
        return frozenset()
    try:
        return _MEDIATION[scope]
    except KeyError:
        raise ConfigurationError(f"Invalid {field} : {scope}") from None


class ScopeFilter(Generic[T]):
    """
    Filter values by the scope they were reached with.

    ``include_scope="runtime"`` keeps compile and runtime dependencies,
    ``compile`` keeps compile, provided and system, ``test`` keeps everything,
    ``provided`` and ``system`` keep only themselves. ``exclude_scope`` uses
    the same expansion to reject values.
    """

    def __init__(
        self,
        include_scope: Optional[str],
        exclude_scope: Optional[str],
        extractor: Callable[[T], Optional[str]],
    ):
        self.includes = get_scopes(include_scope, "include_scope")
        self.excludes = get_scopes(exclude_scope, "exclude_scope")
        self.extractor = extractor

    def test(self, value: T) -> bool:
        scope = self.extractor(value)
        return (not self.includes or scope in self.includes) and scope not in self.excludes

    __call__ = test

    def __repr__(self) -> str:
        return f"ScopeFilter(includes={sorted(self.includes)}, excludes={sorted(self.excludes)})"
