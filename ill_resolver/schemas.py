from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RequestType(str, Enum):
	BOOK = "Book"
	BOOK_CHAPTER = "Book Chapter"
	TABLE_OF_CONTENTS = "Table Contents"
	ARTICLE = "Article"
	CONFERENCE = "Conference"
	OTHER = "Other"

	@classmethod
	def from_document_type(cls, value: Optional[str]) -> "RequestType":
		for member in cls:
			if member.value == (value or "").strip():
				return member
		return cls.OTHER

	@property
	def is_article_like(self) -> bool:
		return self in (RequestType.ARTICLE, RequestType.CONFERENCE)

	@property
	def is_book_like(self) -> bool:
		return self in (RequestType.BOOK, RequestType.BOOK_CHAPTER, RequestType.TABLE_OF_CONTENTS)


class IdentifierKind(str, Enum):
	ISBN = "ISBN"
	DOI = "DOI"
	PMID = "PMID"
	UNKNOWN = "Unknown"


class ResolveState(str, Enum):
	IDLE = "idle"
	RESOLVING_PRIMARY = "resolving_primary"
	RESOLVING_FALLBACK_DOI = "resolving_fallback_doi"
	DONE = "done"
	FAILED = "failed"


class RequestContext(BaseModel):
	"""Request type of the current page, fixed for the lifetime of a resolver."""

	model_config = ConfigDict(frozen=True)
	request_type: RequestType
	identifier_kind: IdentifierKind = IdentifierKind.UNKNOWN

	@classmethod
	def for_request_type(cls, request_type: RequestType) -> "RequestContext":
		kind = IdentifierKind.ISBN if not request_type.is_article_like else IdentifierKind.UNKNOWN
		return cls(request_type=request_type, identifier_kind=kind)


class Identifier(BaseModel):
	model_config = ConfigDict(frozen=True)
	value: str
	kind: IdentifierKind


class CitationRecord(BaseModel):
	model_config = ConfigDict(extra="ignore")
	# Normalized metadata across sources; every field is optional
	origin: IdentifierKind
	authors: Optional[str] = None
	title: Optional[str] = None
	subtitle: Optional[str] = None
	publisher: Optional[str] = None
	date: Optional[str] = None
	month: Optional[str] = None
	journal_title: Optional[str] = None
	volume: Optional[str] = None
	issue: Optional[str] = None
	pages: Optional[str] = None
	isxn: Optional[str] = None
	source: Optional[str] = None
	thumbnail: Optional[str] = None
	viewability: Optional[str] = None
	open_access_url: Optional[str] = None

	@property
	def display_title(self) -> Optional[str]:
		if self.title and self.subtitle:
			return f"{self.title}: {self.subtitle}"
		return self.title


class ResolveRequest(BaseModel):
	request_type: RequestType
	identifier: str


class ResolveResponse(BaseModel):
	request_type: RequestType
	identifier: Optional[Identifier] = None
	state: ResolveState
	fields: Dict[str, str] = Field(default_factory=dict)
	visible: List[str] = Field(default_factory=list)
	error: Optional[str] = None
	full_access_url: Optional[str] = None
