"""JSON:API transport for the DatoCMS Content Management API.

``BackendTransport`` owns one ``httpx.Client`` per session. It speaks the
wire format so the adapter above it deals in plain dicts:

- request bodies are JSON:API documents (``serialize_resource``)
- query parameters are nested with brackets (``filter[fields][title][eq]``)
- responses are flattened (``flatten_resource``) into ``id``, ``type``,
  attributes, relationships as ``{"type", "id"}`` refs, and ``meta``
- non-2xx responses raise ``ContentBackendError``
- HTTP 202 job responses are polled at ``/job-results/{id}``
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from typing import Any

import httpx

from datotools.config.logging import token_fingerprint
from datotools.config.models import BackendConfig
from datotools.domain.errors import TRANSPORT_ERROR_CODE, ContentBackendError

logger = logging.getLogger(__name__)

JSON_API = "application/vnd.api+json"


class ResourceList(list):
    """List of flattened resources plus the backend-reported total."""

    def __init__(self, items: Any = (), total_count: int | None = None) -> None:
        super().__init__(items)
        self.total_count = total_count


def encode_params(params: Mapping[str, Any] | None, prefix: str = "") -> list[tuple[str, str]]:
    """Flatten nested mappings into bracketed query pairs.

    ``{"filter": {"ids": ["a", "b"]}, "page": {"limit": 10}}`` becomes
    ``[("filter[ids]", "a,b"), ("page[limit]", "10")]``. ``None`` values are
    dropped; booleans are lowercase.
    """
    pairs: list[tuple[str, str]] = []
    for key, value in (params or {}).items():
        name = f"{prefix}[{key}]" if prefix else str(key)
        if value is None:
            continue
        if isinstance(value, Mapping):
            pairs.extend(encode_params(value, name))
        elif isinstance(value, (list, tuple)):
            pairs.append((name, ",".join(_scalar(v) for v in value)))
        else:
            pairs.append((name, _scalar(value)))
    return pairs


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def flatten_resource(resource: Mapping[str, Any]) -> dict[str, Any]:
    """Turn one JSON:API resource object into a plain dict."""
    flat: dict[str, Any] = {"id": resource.get("id"), "type": resource.get("type")}
    flat.update(resource.get("attributes") or {})
    for name, rel in (resource.get("relationships") or {}).items():
        flat[name] = rel.get("data") if isinstance(rel, Mapping) else rel
    if resource.get("meta"):
        flat["meta"] = resource["meta"]
    return flat


def ref(resource_type: str, resource_id: str | None) -> dict[str, Any]:
    """JSON:API relationship object for a single linkage."""
    return {"data": {"type": resource_type, "id": resource_id} if resource_id else None}


def refs(resource_type: str, ids: Any) -> dict[str, Any]:
    """JSON:API relationship object for a to-many linkage."""
    return {"data": [{"type": resource_type, "id": i} for i in ids]}


def serialize_resource(
    resource_type: str,
    attributes: Mapping[str, Any] | None = None,
    *,
    resource_id: str | None = None,
    relationships: Mapping[str, Any] | None = None,
    meta: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a JSON:API request document."""
    data: dict[str, Any] = {"type": resource_type}
    if resource_id is not None:
        data["id"] = resource_id
    if attributes:
        data["attributes"] = dict(attributes)
    if relationships:
        data["relationships"] = dict(relationships)
    if meta:
        data["meta"] = dict(meta)
    return {"data": data}


def error_codes(errors: list[dict[str, Any]]) -> list[str]:
    """Backend error codes (``INVALID_FIELD``, ...) in payload order."""
    codes = []
    for err in errors:
        attrs = err.get("attributes") if isinstance(err, Mapping) else None
        code = attrs.get("code") if isinstance(attrs, Mapping) else None
        if isinstance(code, str):
            codes.append(code)
    return codes


def error_from_response(response: httpx.Response) -> ContentBackendError:
    """Build a ContentBackendError from a failed response."""
    errors: list[dict[str, Any]] = []
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, Mapping):
        data = body.get("data")
        if isinstance(data, list):
            errors = [e for e in data if isinstance(e, dict)]
        elif isinstance(data, dict):
            errors = [data]
    codes = error_codes(errors)
    code = codes[0] if codes else None
    summary = f"{response.status_code} {response.reason_phrase}".strip()
    if code:
        summary = f"{summary} ({', '.join(codes)})"
    return ContentBackendError(summary, status=response.status_code, code=code, errors=errors)


class BackendTransport:
    """Authenticated JSON:API client bound to one ``(token, environment)``."""

    def __init__(
        self,
        token: str,
        environment: str | None = None,
        *,
        config: BackendConfig | None = None,
        http_transport: httpx.BaseTransport | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.config = config or BackendConfig()
        self.environment = environment
        self._sleep = sleep
        headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
            "X-Api-Version": self.config.api_version,
        }
        if environment:
            headers["X-Environment"] = environment
        self._client = httpx.Client(
            base_url=self.config.base_url,
            headers=headers,
            timeout=self.config.timeout,
            transport=http_transport,
        )
        # Storage URLs are pre-signed; the API token must never reach them.
        self._external = httpx.Client(timeout=self.config.timeout, transport=http_transport)
        self._fingerprint = token_fingerprint(token)

    def close(self) -> None:
        self._client.close()
        self._external.close()

    def download(self, url: str) -> bytes:
        """Fetch a remote file (used to import uploads from a URL)."""
        try:
            response = self._external.get(url, follow_redirects=True)
        except httpx.TransportError as exc:
            raise ContentBackendError(
                f"Could not download {url}: {exc}", code=TRANSPORT_ERROR_CODE
            ) from exc
        if response.status_code >= 400:
            raise ContentBackendError(
                f"Downloading {url} failed with status {response.status_code}",
                code="DOWNLOAD_FAILED",
            )
        return response.content

    def put_file(self, url: str, content: bytes, headers: Mapping[str, str]) -> None:
        """PUT raw bytes to a pre-signed storage URL."""
        try:
            response = self._external.put(url, content=content, headers=dict(headers))
        except httpx.TransportError as exc:
            raise ContentBackendError(
                f"Could not upload file: {exc}", code=TRANSPORT_ERROR_CODE
            ) from exc
        if response.status_code >= 400:
            raise ContentBackendError(
                f"File storage rejected the upload with status {response.status_code}",
                code="STORAGE_FAILED",
            )

    # ── Low-level ────────────────────────────────────────────────────

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        body: Mapping[str, Any] | None = None,
    ) -> Any:
        """Send one request; return the decoded JSON body (None when empty)."""
        headers = {"Content-Type": JSON_API} if body is not None else None
        logger.debug("%s %s (token %s)", method, path, self._fingerprint)
        try:
            response = self._client.request(
                method,
                path,
                params=encode_params(params) or None,
                json=body,
                headers=headers,
            )
        except httpx.TransportError as exc:
            raise ContentBackendError(
                f"Could not reach DatoCMS: {exc}", code=TRANSPORT_ERROR_CODE
            ) from exc

        if response.status_code >= 400:
            raise error_from_response(response)
        if response.status_code == 202:
            return self._await_job(response)
        if not response.content:
            return None
        return response.json()

    def _await_job(self, response: httpx.Response) -> Any:
        job = (response.json() or {}).get("data") or {}
        job_id = job.get("id")
        if job.get("type") != "job" or not job_id:
            return response.json()
        for _attempt in range(self.config.job_poll_attempts):
            self._sleep(self.config.job_poll_interval)
            try:
                result = self.request("GET", f"/job-results/{job_id}")
            except ContentBackendError as exc:
                if exc.status == 404:
                    continue
                raise
            attrs = ((result or {}).get("data") or {}).get("attributes") or {}
            status = attrs.get("status", 200)
            payload = attrs.get("payload")
            if isinstance(status, int) and status >= 400:
                errors = (payload or {}).get("data") if isinstance(payload, Mapping) else None
                errors = errors if isinstance(errors, list) else []
                codes = error_codes(errors)
                code = codes[0] if codes else None
                raise ContentBackendError(
                    f"Job {job_id} failed with status {status}",
                    status=status,
                    code=code,
                    errors=errors,
                )
            return payload
        raise ContentBackendError(
            f"Job {job_id} did not complete after "
            f"{self.config.job_poll_attempts} polling attempts",
            code="JOB_TIMEOUT",
        )

    # ── Resource helpers ─────────────────────────────────────────────

    def fetch(self, path: str, params: Mapping[str, Any] | None = None) -> dict[str, Any] | None:
        """GET one resource; ``None`` when the backend reports 404."""
        try:
            return unwrap(self.request("GET", path, params=params))
        except ContentBackendError as exc:
            if exc.status == 404:
                return None
            raise

    def fetch_list(self, path: str, params: Mapping[str, Any] | None = None) -> ResourceList:
        return unwrap_list(self.request("GET", path, params=params))

    def send(
        self,
        method: str,
        path: str,
        body: Mapping[str, Any] | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Mutating request; returns the flattened resource(s) or None."""
        result = self.request(method, path, params=params, body=body)
        if isinstance(result, Mapping) and isinstance(result.get("data"), list):
            return unwrap_list(result)
        return unwrap(result)


def unwrap(document: Any) -> Any:
    """Flatten the ``data`` member of a single-resource document."""
    if not isinstance(document, Mapping):
        return document
    data = document.get("data")
    if isinstance(data, Mapping) and "type" in data:
        return flatten_resource(data)
    if isinstance(data, list):
        return unwrap_list(document)
    return document


def unwrap_list(document: Any) -> ResourceList:
    """Flatten a collection document, keeping ``meta.total_count``."""
    if not isinstance(document, Mapping):
        return ResourceList(document or [])
    items = [flatten_resource(r) for r in document.get("data") or [] if isinstance(r, Mapping)]
    total = (document.get("meta") or {}).get("total_count")
    return ResourceList(items, total if isinstance(total, int) else None)
