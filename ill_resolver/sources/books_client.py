from __future__ import annotations

from typing import Any, Dict

import httpx
from loguru import logger

from ..config import get_settings
from ..errors import NotFoundError
from ..schemas import CitationRecord, IdentifierKind
from ..utils.text import as_text, invert_name, year_prefix
from .http import get_json

SOURCE_LABEL = "books.google.com"


def citation_from_volume(volume_info: Dict[str, Any], access_info: Dict[str, Any], isbn: str) -> CitationRecord:
	authors = volume_info.get("authors") or []
	image_links = volume_info.get("imageLinks") or {}
	return CitationRecord(
		origin=IdentifierKind.ISBN,
		authors=invert_name(authors[0]) if authors else None,
		title=as_text(volume_info.get("title")),
		subtitle=as_text(volume_info.get("subtitle")),
		publisher=as_text(volume_info.get("publisher")),
		date=year_prefix(volume_info.get("publishedDate")),
		isxn=isbn,
		source=SOURCE_LABEL,
		thumbnail=image_links.get("thumbnail"),
		viewability=access_info.get("viewability"),
	)


async def lookup_isbn(client: httpx.AsyncClient, isbn: str) -> CitationRecord:
	settings = get_settings()
	params = {"q": f"isbn:{isbn}"}
	data = await get_json(client, settings.books_api_url, IdentifierKind.ISBN, params=params)
	if not isinstance(data, dict):
		data = {}
	total = data.get("totalItems") or 0
	items = data.get("items") or []
	if total <= 0 or not items:
		raise NotFoundError(IdentifierKind.ISBN, f"no volumes for isbn:{isbn}")
	first = items[0]
	logger.debug(f"Books catalog returned {total} volumes for isbn:{isbn}")
	return citation_from_volume(first.get("volumeInfo") or {}, first.get("accessInfo") or {}, isbn)
