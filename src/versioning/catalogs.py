"""Upstream release catalogs: Mojang's version manifest and PaperMC projects."""

from __future__ import annotations

import json
import logging
import urllib.parse
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from common.http_client import TransportError, safe_get
from common.logging_utils import extra_context, is_debug_enabled, safe_url
from config import Settings
from constants import Constants
from .cache import CatalogCache
from .errors import CatalogFetchError, CatalogParseError
from .models import CatalogFamily, catalog_key
from .normalize import normalize

logger = logging.getLogger(__name__)

HEADERS_JSON = {"Accept": "application/json"}


def _parse_release_time(text: Any, version_id: str) -> datetime:
    """Parse an ISO-8601 releaseTime; naive values are taken as UTC."""
    if not isinstance(text, str):
        raise CatalogParseError(f"Version {version_id} has no releaseTime")
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError as exc:
        raise CatalogParseError(f"Version {version_id} has invalid releaseTime {text!r}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _dedupe(versions: List[str]) -> List[str]:
    """Drop repeated identifiers, keeping the first occurrence."""
    return list(dict.fromkeys(versions))


class CatalogFetcher:
    """Fetches release-only catalogs, newest first, once per run.

    Args:
        cache: Cache shared by every lookup made through this fetcher.
        settings: Endpoints and request timeout.
    """

    def __init__(self, cache: Optional[CatalogCache] = None, settings: Optional[Settings] = None):
        self.cache = cache if cache is not None else CatalogCache()
        self.settings = settings if settings is not None else Settings()

    def get_catalog(self, family: CatalogFamily, project: Optional[str] = None) -> List[str]:
        """Return the catalog for family (and PaperMC project).

        Raises:
            CatalogFetchError: Upstream unreachable or non-2xx.
            CatalogParseError: Body is not the expected JSON shape.
        """
        key = catalog_key(family, project)
        if family == CatalogFamily.MINECRAFT:
            versions = self.cache.get_or_fetch(key, self._fetch_minecraft_versions)
        else:
            versions = self.cache.get_or_fetch(key, lambda: self._fetch_papermc_versions(project.lower()))
        return list(versions)

    def _get_payload(self, url: str, context: str) -> Dict[str, Any]:
        """GET url and return its JSON object body."""
        try:
            res = safe_get(url, context=context, timeout=self.settings.request_timeout, headers=HEADERS_JSON)
        except TransportError as exc:
            raise CatalogFetchError(f"Could not fetch {context} versions: {exc}") from exc

        if not res.ok:
            logger.error(
                "Catalog fetch failed",
                extra=extra_context(
                    event="http_response",
                    component="catalogs",
                    outcome="http_error",
                    status_code=res.status_code,
                    target=safe_url(url),
                    context=context
                )
            )
            raise CatalogFetchError(
                f"Failed to fetch {context} versions: HTTP {res.status_code} {res.reason or ''}".rstrip(),
                status_code=res.status_code,
                response_body=res.text,
            )

        try:
            data = json.loads(res.text)
        except ValueError as exc:
            raise CatalogParseError(
                f"Invalid JSON in {context} versions response",
                status_code=res.status_code,
                response_body=res.text,
            ) from exc

        if not isinstance(data, dict) or not isinstance(data.get("versions"), list):
            raise CatalogParseError(
                f"Unexpected {context} versions response: missing 'versions' list",
                status_code=res.status_code,
                response_body=res.text,
            )
        return data

    def _fetch_minecraft_versions(self) -> List[str]:
        """Release entries of the Mojang manifest, latest releaseTime first."""
        logger.debug("Fetching Minecraft version manifest from Mojang")
        manifest = self._get_payload(self.settings.mojang_manifest_url, "Minecraft")

        releases = []
        for entry in manifest["versions"]:
            if not isinstance(entry, dict) or not isinstance(entry.get("id"), str):
                raise CatalogParseError(f"Malformed manifest entry: {entry!r}")
            if entry.get("type") != "release":
                continue
            releases.append((_parse_release_time(entry.get("releaseTime"), entry["id"]), entry["id"]))

        releases.sort(key=lambda item: item[0], reverse=True)
        versions = _dedupe([version_id for _, version_id in releases])
        logger.debug("Cached %d Minecraft versions (excluding snapshots)", len(versions))
        return versions

    def _fetch_papermc_versions(self, project: str) -> List[str]:
        """Release versions of a PaperMC project, highest version first."""
        logger.debug("Fetching %s versions from PaperMC API", project)
        url = f"{self.settings.papermc_api_base}/projects/{urllib.parse.quote(project, safe='')}"
        data = self._get_payload(url, project)

        raw_versions = data["versions"]
        if not all(isinstance(v, str) for v in raw_versions):
            raise CatalogParseError(f"Non-string version in {project} versions response")

        releases = [
            v for v in raw_versions
            if not any(marker in v for marker in Constants.PRERELEASE_MARKERS)
        ]
        normalized = {v: normalize(v) for v in releases}
        releases = [v for v in releases if normalized[v] is not None]
        releases.sort(key=lambda v: normalized[v], reverse=True)
        versions = _dedupe(releases)

        if is_debug_enabled(logger):
            logger.debug(
                "Cached %d %s versions",
                len(versions),
                project,
                extra=extra_context(event="cache_fill", component="catalogs", context=project),
            )
        return versions
