"""Hangar API client: authentication and version upload."""

from __future__ import annotations

import contextlib
import json
import logging
import urllib.parse
from typing import Any, Dict, Optional, Sequence

from common.http_client import TransportError, safe_post
from config import Settings
from constants import Constants
from .files import UploadFile

logger = logging.getLogger(__name__)


class HangarError(Exception):
    """Raised when the Hangar API rejects a request or answers unexpectedly."""

    def __init__(self, message: str, status_code: Optional[int] = None, response_body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class HangarClient:
    """Thin client over the two Hangar endpoints an upload needs."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings if settings is not None else Settings()

    @property
    def base_url(self) -> str:
        return self.settings.hangar_api_base

    @staticmethod
    def _headers(slug: str) -> Dict[str, str]:
        return {"User-Agent": f"{Constants.USER_AGENT}; {slug};"}

    @staticmethod
    def _json_body(res: Any, what: str) -> Dict[str, Any]:
        """Check status and decode the JSON object body of res."""
        if not res.ok:
            raise HangarError(f"{what} failed: {res.reason}", res.status_code, res.text)
        try:
            body = json.loads(res.text)
        except ValueError as exc:
            raise HangarError(f"Invalid {what.lower()} response format", res.status_code, res.text) from exc
        if not isinstance(body, dict):
            raise HangarError(f"Invalid {what.lower()} response format", res.status_code, res.text)
        return body

    def authenticate(self, api_token: str, slug: str) -> str:
        """Exchange an API key for a short-lived JWT.

        Args:
            api_token: Hangar API key.
            slug: Project slug, used for the User-Agent.

        Returns:
            str: Token for the Authorization header.
        """
        logger.debug("Authenticating with Hangar API")
        try:
            res = safe_post(
                f"{self.base_url}/authenticate",
                context="hangar",
                timeout=self.settings.request_timeout,
                params={"apiKey": api_token},
                headers=self._headers(slug),
            )
        except TransportError as exc:
            raise HangarError(f"Authentication network error: {exc}") from exc

        body = self._json_body(res, "Authentication")
        token = body.get("token")
        if not token:
            raise HangarError("Authentication response missing token", res.status_code, res.text)

        logger.info("Successfully authenticated with Hangar API")
        logger.debug("Token expires in: %s seconds", body.get("expiresIn"))
        return token

    def upload_version(
        self,
        slug: str,
        token: str,
        upload_files: Sequence[UploadFile],
        version_upload: Dict[str, Any],
    ) -> str:
        """Upload a version with its attached files.

        Args:
            slug: Project slug.
            token: Token from authenticate().
            upload_files: Local files, attached in order as 'files' parts.
            version_upload: versionUpload payload (version, channel, files, dependencies...).

        Returns:
            str: URL of the created version.
        """
        url = f"{self.base_url}/projects/{urllib.parse.quote(slug, safe='')}/upload"
        logger.debug(
            "Uploading version to Hangar: version=%s channel=%s files=%d",
            version_upload.get("version"),
            version_upload.get("channel"),
            len(version_upload.get("files", [])),
        )

        headers = self._headers(slug)
        headers["Authorization"] = token
        with contextlib.ExitStack() as stack:
            parts = [
                ("files", (f.name, stack.enter_context(open(f.path, "rb")), "application/x-binary"))
                for f in upload_files
            ]
            parts.append(("versionUpload", (None, json.dumps(version_upload), "application/json")))
            try:
                res = safe_post(url, context="hangar", timeout=self.settings.request_timeout,
                                headers=headers, files=parts)
            except TransportError as exc:
                raise HangarError(f"Upload network error: {exc}") from exc

        body = self._json_body(res, "Upload")
        upload_url = body.get("url")
        if not upload_url:
            raise HangarError("Upload response missing URL", res.status_code, res.text)

        logger.info("Successfully uploaded version to Hangar")
        return upload_url
