"""Client for interacting with the deps.dev API."""

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests

from . import __version__
from .models import Artifact

logger = logging.getLogger(__name__)


def package_name(artifact: Artifact) -> str:
    return f"{artifact.group_id}:{artifact.artifact_id}"


class DepsDevClient:
    """Client for fetching resolved Maven dependency graphs from deps.dev."""

    BASE_URL = "https://api.deps.dev/v3/systems"

    def __init__(self, timeout: int = 30):
        """Initialize the API client."""
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            "Accept": "application/json",
            "User-Agent": f"mvndeps/{__version__}"
        })

    def dependency_graph_url(self, artifact: Artifact) -> str:
        # deps.dev names Maven packages groupId:artifactId; both parts of the path are URL-encoded
        return (
            f"{self.BASE_URL}/maven/packages/{quote(package_name(artifact), safe='')}"
            f"/versions/{quote(artifact.version, safe='')}:dependencies"
        )

    def get_dependency_graph(self, artifact: Artifact) -> Optional[Dict[str, Any]]:
        """
        Get the resolved dependency graph of an artifact.

        deps.dev resolves the graph for the artifact's jar; classifier and type
        are not part of the request.

        Args:
            artifact: The artifact to fetch dependencies for

        Returns:
            JSON response containing nodes and edges, or None if the version is
            unknown to deps.dev or the request fails
        """
        url = self.dependency_graph_url(artifact)
        logger.debug(
            f"Fetching dependency graph for package {package_name(artifact)} "
            f"version {artifact.version} (encoded {quote(artifact.version, safe='')})"
        )
        logger.debug(f"  URL: {url}")

        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Error fetching dependencies for {artifact.key}: {e}")
            return None

        if response.status_code == 404:
            logger.info(f"deps.dev has no dependency graph for {artifact.key}")
            return None
        if response.status_code != 200:
            logger.warning(f"Failed to get dependency graph for {artifact.key}: HTTP {response.status_code}")
            return None

        try:
            graph = response.json()
        except ValueError as e:
            logger.error(f"Invalid dependency graph for {artifact.key}: {e}")
            return None
        logger.debug(f"  {len(graph.get('nodes', []))} nodes, {len(graph.get('edges', []))} edges")
        return graph

    def close(self):
        """Close the session and clean up resources."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
