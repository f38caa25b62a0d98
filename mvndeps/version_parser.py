"""Version parsing utilities for Maven version strings and version ranges."""

import re
from dataclasses import dataclass
from functools import total_ordering
from typing import List, Optional, Tuple

from .exceptions import VersionParseError


SNAPSHOT_VERSION = "SNAPSHOT"

# <base>-<yyyyMMdd>.<HHmmss>-<buildNumber>
VERSION_FILE_PATTERN = re.compile(r'^(.*)-([0-9]{8}\.[0-9]{6})-([0-9]+)$')


def to_snapshot_version(version: str) -> str:
    """
    Normalize a timestamped snapshot version back to its ``-SNAPSHOT`` form.

    ``1.0-20230101.120000-3`` becomes ``1.0-SNAPSHOT``. Any other shape is
    returned unchanged.
    """
    last_hyphen = version.rfind('-')
    if last_hyphen > 0:
        prev_hyphen = version.rfind('-', 0, last_hyphen)
        if prev_hyphen > 0:
            match = VERSION_FILE_PATTERN.match(version)
            if match:
                return f"{match.group(1)}-{SNAPSHOT_VERSION}"
    return version


def is_snapshot(version: str) -> bool:
    """Return True for ``-SNAPSHOT`` and timestamped snapshot versions."""
    return version.endswith(SNAPSHOT_VERSION) or to_snapshot_version(version) != version


# Qualifier ordering: alpha < beta < milestone < rc < snapshot < release < sp < anything else
_QUALIFIER_RANKS = {
    'alpha': 0,
    'beta': 1,
    'milestone': 2,
    'rc': 3,
    'snapshot': 4,
    '': 5,
    'sp': 6,
}
_QUALIFIER_ALIASES = {
    'a': 'alpha',
    'b': 'beta',
    'm': 'milestone',
    'cr': 'rc',
    'ga': '',
    'final': '',
    'release': '',
}
_RELEASE_RANK = _QUALIFIER_RANKS['']
_OTHER_RANK = len(_QUALIFIER_RANKS)

_TOKEN_PATTERN = re.compile(r'\d+|[a-z]+')


@total_ordering
class ArtifactVersion:
    """
    A comparable Maven version.

    Versions are split into numeric and alphabetic items (``1.0-rc2`` gives
    ``1, 0, rc, 2``). Numeric items compare numerically and sort after any
    qualifier; qualifiers compare by their well-known rank, unknown ones
    lexically after ``sp``. Missing items are padded with ``0`` or the release
    qualifier so that ``1 == 1.0 == 1.0.0`` and ``1.0-SNAPSHOT < 1.0``.
    """

    def __init__(self, version: str):
        if version is None or not version.strip():
            raise VersionParseError(f"Invalid version: '{version}'")
        self.value = version.strip()
        self._items = self._parse(self.value)

    @staticmethod
    def _parse(version: str) -> List[Tuple]:
        tokens = _TOKEN_PATTERN.findall(version.lower())
        items = []
        for i, token in enumerate(tokens):
            if token.isdigit():
                items.append((1, int(token), ''))
                continue
            followed_by_digit = i + 1 < len(tokens) and tokens[i + 1].isdigit()
            if len(token) == 1 and not followed_by_digit:
                qualifier = token
            else:
                qualifier = _QUALIFIER_ALIASES.get(token, token)
            rank = _QUALIFIER_RANKS.get(qualifier, _OTHER_RANK)
            items.append((0, rank, qualifier if rank == _OTHER_RANK else ''))

        # Trailing zeros and release qualifiers carry no ordering information
        while items and items[-1] in ((1, 0, ''), (0, _RELEASE_RANK, '')):
            items.pop()
        return items

    @staticmethod
    def _padding_for(item: Tuple) -> Tuple:
        return (1, 0, '') if item[0] == 1 else (0, _RELEASE_RANK, '')

    def compare_to(self, other: 'ArtifactVersion') -> int:
        length = max(len(self._items), len(other._items))
        for i in range(length):
            left = self._items[i] if i < len(self._items) else None
            right = other._items[i] if i < len(other._items) else None
            if left is None:
                left = self._padding_for(right)
            if right is None:
                right = self._padding_for(left)
            if left != right:
                return -1 if left < right else 1
        return 0

    def __eq__(self, other) -> bool:
        if not isinstance(other, ArtifactVersion):
            return NotImplemented
        return self.compare_to(other) == 0

    def __lt__(self, other: 'ArtifactVersion') -> bool:
        return self.compare_to(other) < 0

    def __hash__(self) -> int:
        return hash(tuple(self._items))

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"ArtifactVersion('{self.value}')"


@dataclass(frozen=True)
class Restriction:
    """One bracketed interval of a version range; a missing bound is unbounded."""

    lower_bound: Optional[ArtifactVersion]
    lower_inclusive: bool
    upper_bound: Optional[ArtifactVersion]
    upper_inclusive: bool

    def contains(self, version: ArtifactVersion) -> bool:
        if self.lower_bound is not None:
            comparison = self.lower_bound.compare_to(version)
            if comparison == 0 and not self.lower_inclusive:
                return False
            if comparison > 0:
                return False
        if self.upper_bound is not None:
            comparison = self.upper_bound.compare_to(version)
            if comparison == 0 and not self.upper_inclusive:
                return False
            if comparison < 0:
                return False
        return True


EVERYTHING = Restriction(None, False, None, False)


@dataclass(frozen=True)
class VersionRange:
    """A Maven version range such as ``[1.0,2.0)`` or ``(,1.0],[1.2,)``."""

    spec: str
    recommended_version: Optional[ArtifactVersion]
    restrictions: Tuple[Restriction, ...]

    def contains(self, version: ArtifactVersion) -> bool:
        if not isinstance(version, ArtifactVersion):
            version = ArtifactVersion(version)
        return any(restriction.contains(version) for restriction in self.restrictions)

    def __str__(self) -> str:
        return self.spec


class VersionParser:
    """Parser for Maven versions and version ranges."""

    @classmethod
    def parse_version(cls, version: str) -> ArtifactVersion:
        """Parse a single version string."""
        return ArtifactVersion(version)

    @classmethod
    def parse_version_range(cls, spec: str) -> VersionRange:
        """
        Parse a version range specification.

        Args:
            spec: A range like ``[1.0,2.0)``, a union of ranges separated by
                commas, or a plain version (which allows everything and
                recommends that version).

        Returns:
            The parsed VersionRange

        Raises:
            VersionParseError: If the specification is malformed
        """
        if spec is None:
            raise VersionParseError("Version range must not be None")

        process = spec.strip()
        restrictions: List[Restriction] = []
        upper_bound: Optional[ArtifactVersion] = None
        seen_restriction = False

        while process.startswith('[') or process.startswith('('):
            close_paren = process.find(')')
            close_bracket = process.find(']')
            index = close_bracket
            if close_paren >= 0 and (close_bracket < 0 or close_paren < close_bracket):
                index = close_paren
            if index < 0:
                raise VersionParseError(f"Unbounded range: {spec}")

            restriction = cls._parse_restriction(process[:index + 1])
            if seen_restriction:
                if restriction.lower_bound is None or (
                    upper_bound is not None and restriction.lower_bound.compare_to(upper_bound) < 0
                ):
                    raise VersionParseError(f"Ranges overlap: {spec}")
            restrictions.append(restriction)
            seen_restriction = True
            upper_bound = restriction.upper_bound

            process = process[index + 1:].strip()
            if process.startswith(','):
                process = process[1:].strip()

        recommended = None
        if process:
            if restrictions:
                raise VersionParseError(
                    f"Only fully-qualified sets allowed in multiple set scenario: {spec}"
                )
            recommended = ArtifactVersion(process)
            restrictions.append(EVERYTHING)

        return VersionRange(spec=spec, recommended_version=recommended, restrictions=tuple(restrictions))

    @staticmethod
    def _parse_restriction(spec: str) -> Restriction:
        lower_inclusive = spec.startswith('[')
        upper_inclusive = spec.endswith(']')
        process = spec[1:-1].strip()

        if ',' not in process:
            if not lower_inclusive or not upper_inclusive:
                raise VersionParseError(f"Single version must be surrounded by []: {spec}")
            version = ArtifactVersion(process)
            return Restriction(version, True, version, True)

        lower, upper = (part.strip() for part in process.split(',', 1))
        if lower == upper:
            raise VersionParseError(f"Range cannot have identical boundaries: {spec}")

        lower_version = ArtifactVersion(lower) if lower else None
        upper_version = ArtifactVersion(upper) if upper else None
        if lower_version is not None and upper_version is not None and upper_version < lower_version:
            raise VersionParseError(f"Range defies version ordering: {spec}")

        return Restriction(lower_version, lower_inclusive, upper_version, upper_inclusive)
