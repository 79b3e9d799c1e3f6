from __future__ import annotations

import re
from typing import Optional

from ..schemas import Identifier, IdentifierKind, RequestType

_DOI_MARKER = "10."
_DIGITS_RE = re.compile(r"^\d+$")


def normalize_doi(text: str) -> str:
	doi = text.replace("http:", "https:", 1).replace("dx.doi.org", "doi.org", 1)
	if doi.endswith("."):
		doi = doi[:-1]
	return doi


def strip_hyphens(text: str) -> str:
	return text.replace("-", "")


def is_pmid(text: str) -> bool:
	return bool(_DIGITS_RE.match(text))


def classify_identifier(raw: Optional[str], request_type: RequestType) -> Optional[Identifier]:
	"""Turn raw form input into a normalized identifier.

	Article and Conference pages accept a DOI (anything containing "10.") or a
	PMID; every other page takes an ISBN. Nothing is validated here, malformed
	values fail later at the upstream call (or the PMID digit check).
	"""
	value = (raw or "").strip()
	if not value:
		return None
	if request_type.is_article_like:
		if _DOI_MARKER in value:
			return Identifier(value=normalize_doi(value), kind=IdentifierKind.DOI)
		return Identifier(value=strip_hyphens(value), kind=IdentifierKind.PMID)
	return Identifier(value=strip_hyphens(value), kind=IdentifierKind.ISBN)
