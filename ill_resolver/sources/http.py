from __future__ import annotations

from typing import Any, Dict, Optional

import httpx
from loguru import logger

from ..config import get_settings
from ..errors import NotFoundError, UnexpectedStatusError, UpstreamUnavailableError
from ..schemas import IdentifierKind

CSL_JSON = "application/vnd.citationstyles.csl+json"


def build_client(transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
	settings = get_settings()
	return httpx.AsyncClient(
		timeout=httpx.Timeout(settings.http_timeout_s),
		follow_redirects=True,
		headers={"User-Agent": settings.user_agent},
		transport=transport,
	)


async def get_json(
	client: httpx.AsyncClient,
	url: str,
	kind: IdentifierKind,
	params: Optional[Dict[str, Any]] = None,
	headers: Optional[Dict[str, str]] = None,
) -> Any:
	"""GET a JSON document; 200 is success, anything else raises a ResolutionError."""
	try:
		resp = await client.get(url, params=params, headers=headers)
	except httpx.HTTPError as e:
		raise UpstreamUnavailableError(kind, f"{type(e).__name__} requesting {url}") from e
	logger.debug(f"GET {resp.request.url} -> {resp.status_code}")
	if resp.status_code == 404:
		raise NotFoundError(kind, f"{url} returned 404", status_code=404)
	if resp.status_code != 200:
		raise UnexpectedStatusError(kind, f"{url} returned {resp.status_code}", status_code=resp.status_code)
	try:
		return resp.json()
	except ValueError as e:
		raise NotFoundError(kind, f"{url} returned a body that is not JSON", status_code=resp.status_code) from e
