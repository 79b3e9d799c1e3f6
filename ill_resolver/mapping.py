"""Field maps from citation slots to the ILL form inputs of each request type."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

from loguru import logger
from pydantic import BaseModel, ConfigDict

from .errors import FieldMapError
from .schemas import CitationRecord, RequestType


class FieldMap(BaseModel):
	model_config = ConfigDict(frozen=True)
	author: Optional[str] = None
	title: Optional[str] = None
	journal_title: Optional[str] = None
	publisher: Optional[str] = None
	date: Optional[str] = None
	month: Optional[str] = None
	volume: Optional[str] = None
	issue: Optional[str] = None
	pages: Optional[str] = None
	isxn: Optional[str] = None
	source: Optional[str] = None

	def slots(self) -> List[Tuple[str, str]]:
		return [(slot, field_id) for slot, field_id in self.model_dump().items() if field_id]

	def field_ids(self) -> List[str]:
		return [field_id for _, field_id in self.slots()]


_BOOK = FieldMap(
	author="LoanAuthor",
	title="LoanTitle",
	publisher="LoanPublisher",
	date="LoanDate",
	isxn="ISSN",
	source="CitedIn",
)

_CHAPTER = FieldMap(
	author="PhotoItemAuthor",
	title="PhotoJournalTitle",
	publisher="PhotoItemPublisher",
	date="PhotoJournalYear",
	isxn="ISSN",
	source="CitedIn",
)

_ARTICLE = FieldMap(
	author="PhotoArticleAuthor",
	title="PhotoArticleTitle",
	journal_title="PhotoJournalTitle",
	date="PhotoJournalYear",
	month="PhotoJournalMonth",
	volume="PhotoJournalVolume",
	issue="PhotoJournalIssue",
	pages="PhotoJournalInclusivePages",
	isxn="ISSN",
	source="CitedIn",
)

FIELD_MAPS: Dict[RequestType, FieldMap] = {
	RequestType.BOOK: _BOOK,
	RequestType.BOOK_CHAPTER: _CHAPTER,
	RequestType.TABLE_OF_CONTENTS: _CHAPTER,
	RequestType.ARTICLE: _ARTICLE,
	RequestType.CONFERENCE: _ARTICLE.model_copy(update={"publisher": "PhotoItemPublisher"}),
}

# Title field that must be blank for the resolver panel to be offered
BLANK_FORM_FIELD: Dict[RequestType, str] = {
	RequestType.BOOK: "LoanTitle",
	RequestType.BOOK_CHAPTER: "PhotoJournalTitle",
	RequestType.TABLE_OF_CONTENTS: "PhotoJournalTitle",
	RequestType.ARTICLE: "PhotoJournalTitle",
	RequestType.CONFERENCE: "PhotoJournalTitle",
}

_BOOK_SLOTS = ("title", "publisher", "date", "isxn", "source")
_ARTICLE_SLOTS = ("author", "title", "journal_title", "date", "month", "volume", "issue", "pages", "isxn", "source")


def validate_field_maps(maps: Dict[RequestType, FieldMap]) -> None:
	for request_type in RequestType:
		if request_type is RequestType.OTHER:
			continue
		field_map = maps.get(request_type)
		if field_map is None:
			raise FieldMapError(f"no field map for request type {request_type.value!r}")
		required = _ARTICLE_SLOTS if request_type.is_article_like else _BOOK_SLOTS
		missing = [slot for slot in required if not getattr(field_map, slot)]
		if request_type is RequestType.CONFERENCE and not field_map.publisher:
			missing.append("publisher")
		if missing:
			raise FieldMapError(f"{request_type.value!r} map lacks slots: {', '.join(missing)}")
		ids = field_map.field_ids()
		if len(ids) != len(set(ids)):
			raise FieldMapError(f"{request_type.value!r} map writes the same field twice")


def check_form_fields(field_map: FieldMap, available: Iterable[str]) -> None:
	known = set(available)
	missing = [field_id for field_id in field_map.field_ids() if field_id not in known]
	if missing:
		raise FieldMapError(f"form has no inputs named: {', '.join(missing)}")


def field_values(record: CitationRecord, field_map: FieldMap, publisher_placeholder: str) -> Dict[str, str]:
	"""Values to write into the form for a resolved record.

	Missing values become empty strings, except the publisher which falls
	back to ``publisher_placeholder``.
	"""
	slot_values = {
		"author": record.authors,
		"title": record.display_title,
		"journal_title": record.journal_title,
		"publisher": record.publisher or publisher_placeholder,
		"date": record.date,
		"month": record.month,
		"volume": record.volume,
		"issue": record.issue,
		"pages": record.pages,
		"isxn": record.isxn,
		"source": record.source,
	}
	values = {field_id: slot_values[slot] or "" for slot, field_id in field_map.slots()}
	logger.debug(f"Mapped {sum(1 for v in values.values() if v)}/{len(values)} fields from {record.origin.value} record")
	return values


validate_field_maps(FIELD_MAPS)
