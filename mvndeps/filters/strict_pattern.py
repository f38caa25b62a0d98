"""Artifact filtering on ``groupId:artifactId:type:version`` patterns."""

import logging
from typing import List, Sequence

from ..exceptions import VersionParseError
from ..models import Artifact
from ..version_parser import VersionParser

logger = logging.getLogger(__name__)


class StrictPatternArtifactFilter:
    """
    Include or exclude artifacts matching any of a list of patterns.

    Pattern syntax is ``[groupId]:[artifactId]:[type]:[version]``. Every
    segment is optional and supports full and partial ``*`` wildcards; an
    empty segment is an implicit wildcard. ``org.apache.*`` matches every
    artifact whose group id starts with ``org.apache.``, ``:::*-SNAPSHOT``
    matches every snapshot. A version segment starting with ``[`` or ``(`` is
    a version range.

    In include mode the filter accepts artifacts matched by at least one
    pattern, in exclude mode it accepts artifacts matched by none.
    """

    def __init__(self, patterns: Sequence[str], include: bool, version_parser=VersionParser):
        self.patterns: List[str] = list(patterns)
        self.include = include
        self.version_parser = version_parser

    def test(self, artifact: Artifact) -> bool:
        matched = any(self._include(artifact, pattern) for pattern in self.patterns)
        return matched if self.include else not matched

    __call__ = test

    def _include(self, artifact: Artifact, pattern: str) -> bool:
        tokens = [artifact.group_id, artifact.artifact_id, artifact.type, artifact.version]

        pattern_tokens = pattern.split(':')
        # Trailing empty segments are implicit wildcards
        while pattern_tokens and not pattern_tokens[-1]:
            pattern_tokens.pop()

        if len(pattern_tokens) > len(tokens):
            return False

        return all(self._matches(token, segment) for token, segment in zip(tokens, pattern_tokens))

    def _matches(self, token: str, pattern: str) -> bool:
        if pattern == '*' or not pattern:
            return True
        if pattern.startswith('*') and pattern.endswith('*'):
            return pattern[1:-1] in token
        if pattern.startswith('*'):
            return token.endswith(pattern[1:])
        if pattern.endswith('*'):
            return token.startswith(pattern[:-1])
        if pattern.startswith('[') or pattern.startswith('('):
            return self._is_version_included_in_range(token, pattern)
        return token == pattern

    def _is_version_included_in_range(self, version: str, version_range: str) -> bool:
        try:
            parsed_range = self.version_parser.parse_version_range(version_range)
            return parsed_range.contains(self.version_parser.parse_version(version))
        except VersionParseError as e:
            logger.debug(f"Treating unparsable range {version_range} as no match: {e}")
            return False

    def __repr__(self) -> str:
        mode = "include" if self.include else "exclude"
        return f"StrictPatternArtifactFilter({mode}, {self.patterns})"
