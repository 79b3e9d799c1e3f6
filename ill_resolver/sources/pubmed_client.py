from __future__ import annotations

from typing import Any, Dict, List

import httpx
from loguru import logger

from ..config import get_settings
from ..errors import MalformedIdentifierError, NotFoundError
from ..schemas import IdentifierKind
from ..utils.identifiers import is_pmid
from .http import get_json


def doi_from_summary(payload: Any, pmid: str) -> str:
	"""Pick the DOI out of an esummary JSON document.

	The summary lists every known article id under
	``result[pmid].articleids``; the first entry with ``idtype == "doi"``
	wins. A missing record, id list or DOI entry raises NotFoundError.
	"""
	result = payload.get("result") if isinstance(payload, dict) else None
	record = result.get(pmid) if isinstance(result, dict) else None
	if not isinstance(record, dict):
		raise NotFoundError(IdentifierKind.PMID, f"no summary record for pmid {pmid}")
	article_ids: List[Dict[str, Any]] = record.get("articleids") or []
	for entry in article_ids:
		if entry.get("idtype") == "doi" and entry.get("value"):
			return str(entry["value"])
	raise NotFoundError(IdentifierKind.PMID, f"pmid {pmid} has no DOI among {len(article_ids)} article ids")


async def find_doi(client: httpx.AsyncClient, pmid: str) -> str:
	if not is_pmid(pmid):
		raise MalformedIdentifierError(IdentifierKind.PMID, f"pmid must be all digits, got {pmid!r}")
	settings = get_settings()
	params = {"db": "pubmed", "id": pmid, "format": "json"}
	payload = await get_json(client, settings.esummary_url, IdentifierKind.PMID, params=params)
	doi = doi_from_summary(payload, pmid)
	logger.debug(f"pmid {pmid} maps to DOI {doi}")
	return doi
