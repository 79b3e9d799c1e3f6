from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import httpx
from loguru import logger

from ..config import get_settings
from ..errors import NotFoundError
from ..schemas import CitationRecord, IdentifierKind
from ..utils.text import as_text, join_csl_authors
from .http import CSL_JSON, get_json

SOURCE_LABEL = "DOI"


def doi_url(doi: str) -> str:
	resolver = get_settings().doi_resolver_url
	if resolver in doi:
		return doi
	return resolver + doi


def _first(value: Any) -> Optional[str]:
	# CSL allows both a plain string and a list for title-like fields
	if isinstance(value, list):
		return as_text(value[0]) if value else None
	return as_text(value)


def _extract_year_month(item: Dict[str, Any]) -> Tuple[Optional[str], Optional[str]]:
	issued = item.get("issued") or {}
	parts: List[Any] = issued.get("date-parts") or []
	if not parts or not parts[0]:
		return None, None
	first = parts[0]
	year = as_text(first[0])
	month = as_text(first[1]) if len(first) > 1 else None
	return year, month


def _extract_isxn(item: Dict[str, Any]) -> Optional[str]:
	if item.get("ISSN"):
		return _first(item["ISSN"])
	if item.get("ISBN"):
		return _first(item["ISBN"])
	return None


def citation_from_csl(item: Dict[str, Any]) -> CitationRecord:
	year, month = _extract_year_month(item)
	return CitationRecord(
		origin=IdentifierKind.DOI,
		authors=join_csl_authors(item.get("author")),
		title=_first(item.get("title")),
		publisher=as_text(item.get("publisher")),
		date=year,
		month=month,
		journal_title=_first(item.get("container-title")),
		volume=as_text(item.get("volume")),
		issue=as_text(item.get("issue")),
		pages=as_text(item.get("page")),
		isxn=_extract_isxn(item),
		source=SOURCE_LABEL,
	)


async def resolve_doi(client: httpx.AsyncClient, doi: str) -> CitationRecord:
	url = doi_url(doi)
	data = await get_json(client, url, IdentifierKind.DOI, headers={"Accept": CSL_JSON})
	if not isinstance(data, dict):
		raise NotFoundError(IdentifierKind.DOI, f"{url} did not return a CSL-JSON object")
	logger.debug(f"CSL record for {url}: type={data.get('type')} title={_first(data.get('title'))!r}")
	return citation_from_csl(data)
