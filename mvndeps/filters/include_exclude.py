"""Include/exclude filtering on a single extracted string field."""

import operator
from typing import Callable, Generic, Iterable, List, Optional, TypeVar

T = TypeVar('T')


def split_list(value: Optional[str]) -> List[str]:
    """Split a comma separated list, trimming entries and dropping empty ones."""
    if not value:
        return []
    return [token.strip() for token in value.split(',') if token.strip()]


class IncludeExcludeFilter(Generic[T]):
    """
    Filter values by comparing one extracted field against include and exclude lists.

    Used for types, classifiers, group ids and artifact ids. A value passes
    when the include list is empty or one include matches, and no exclude
    matches. Excludes are applied after includes, so a value named in both
    lists is rejected.

    The comparator is called as ``comparator(field_value, pattern)``; it
    defaults to equality. Group ids use ``str.startswith`` so that
    ``org.apache`` selects every ``org.apache.*`` group.
    """

    def __init__(
        self,
        include: Optional[str],
        exclude: Optional[str],
        extractor: Callable[[T], Optional[str]],
        comparator: Callable[[str, str], bool] = operator.eq,
    ):
        self.includes = split_list(include)
        self.excludes = split_list(exclude)
        self.extractor = extractor
        self.comparator = comparator

    def _matches(self, value: T, pattern: str) -> bool:
        extracted = self.extractor(value)
        if extracted is None:
            return False
        return self.comparator(extracted, pattern)

    def test(self, value: T) -> bool:
        included = not self.includes or any(self._matches(value, p) for p in self.includes)
        return included and not any(self._matches(value, p) for p in self.excludes)

    __call__ = test

    def filter(self, values: Iterable[T]) -> List[T]:
        """Return the accepted values, preserving their order."""
        return [value for value in values if self.test(value)]

    def __repr__(self) -> str:
        return f"IncludeExcludeFilter(includes={self.includes}, excludes={self.excludes})"
