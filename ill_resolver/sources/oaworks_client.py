from __future__ import annotations

from typing import Optional

import httpx
from loguru import logger

from ..config import get_settings
from ..errors import ResolutionError
from ..schemas import IdentifierKind
from .http import get_json


async def find_open_access_url(client: httpx.AsyncClient, identifier: str) -> Optional[str]:
	"""Return an open-access URL for the work, or None when there is none."""
	settings = get_settings()
	try:
		data = await get_json(client, settings.open_access_url, IdentifierKind.DOI, params={"id": identifier})
	except ResolutionError as e:
		logger.debug(f"No open access for {identifier}: {e}")
		return None
	url = data.get("url") if isinstance(data, dict) else None
	if not url:
		logger.debug(f"No open access for {identifier}")
		return None
	return str(url)
