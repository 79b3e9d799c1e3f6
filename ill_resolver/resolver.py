from __future__ import annotations

import asyncio
import html
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx
from loguru import logger

from .config import get_settings
from .errors import ResolutionError
from .form import (
	CITED_IN_FIELD,
	DOI_FIELD,
	FULL_ACCESS_BUTTON,
	HOST_SUBMIT_BUTTON,
	IDENTIFIER_INPUT,
	INPUT_TYPE_LABEL,
	NOTES_FIELD,
	RESOLVE_CONTAINER,
	RESOLVE_ERROR,
	RESOLVE_OPTIONS,
	RESOLVE_RESULT,
	RESOLVE_RESULT_BODY,
	SUGGEST_ORDER,
	SUGGEST_TYPE,
	THUMBNAIL,
	USER_DATE_FIELD,
	WANTED_BY_FIELD,
	FormHost,
	FormState,
)
from .mapping import BLANK_FORM_FIELD, FIELD_MAPS, check_form_fields, field_values
from .schemas import (
	CitationRecord,
	Identifier,
	IdentifierKind,
	RequestContext,
	RequestType,
	ResolveResponse,
	ResolveState,
)
from .sources.books_client import lookup_isbn
from .sources.doi_client import resolve_doi
from .sources.http import build_client
from .sources.oaworks_client import find_open_access_url
from .sources.pubmed_client import find_doi
from .utils.identifiers import classify_identifier

ERROR_TEMPLATE = "There was a problem retrieving this {kind}. Please try again, or complete the form below."
FULL_VIEW = "ALL_PAGES"
GOOGLE_BOOKS_MARKER = "google books"


def error_message(kind: IdentifierKind) -> str:
	return ERROR_TEMPLATE.format(kind=kind.value)


class Resolver:
	"""Per-page resolver session.

	Holds the current identifier, the live citation and the cached open-access
	URL. Every call to :meth:`resolve` takes a new token; results of an older
	call that finish late are dropped instead of being written to the form.
	"""

	def __init__(self, context: RequestContext, host: FormHost, client: Optional[httpx.AsyncClient] = None) -> None:
		self.context = context
		self.host = host
		self.field_map = FIELD_MAPS.get(context.request_type)
		if self.field_map is not None:
			check_form_fields(self.field_map, host.input_ids())
		self._client = client
		self._settings = get_settings()
		self._token = 0
		self._task: Optional[asyncio.Task] = None
		self._access_task: Optional[asyncio.Task] = None
		self.enabled = False
		self._reset()

	@classmethod
	def from_document_type(cls, document_type: str, host: FormHost, client: Optional[httpx.AsyncClient] = None) -> "Resolver":
		request_type = RequestType.from_document_type(document_type)
		return cls(RequestContext.for_request_type(request_type), host, client=client)

	def _reset(self) -> None:
		self.identifier: Optional[Identifier] = None
		# Identifier the live citation was resolved from (the DOI after a PMID fallback)
		self.resolved_identifier: Optional[Identifier] = None
		self.citation: Optional[CitationRecord] = None
		self.open_access_url: Optional[str] = None
		self.error: Optional[str] = None
		self.state = ResolveState.IDLE

	# --------------------------
	# Page wiring
	# --------------------------

	def start(self) -> bool:
		"""Offer the resolver panel when the request form is still blank."""
		blank_field = BLANK_FORM_FIELD.get(self.context.request_type)
		if blank_field is None or self.host.get_value(blank_field):
			self.enabled = False
			return False
		self.host.set_visible(RESOLVE_CONTAINER, True)
		if self.context.request_type.is_article_like:
			self.host.set_text(INPUT_TYPE_LABEL, "DOI or PMID")
			self.host.set_placeholder(IDENTIFIER_INPUT, "10.1155/2019/9613090")
		else:
			self.host.set_text(INPUT_TYPE_LABEL, "ISBN")
			self.host.set_placeholder(IDENTIFIER_INPUT, "9781338878981")
		self.enabled = True
		return True

	def set_identifier(self, raw: Optional[str]) -> Optional[Identifier]:
		"""Classify new input from the identifier field."""
		self.host.set_value(IDENTIFIER_INPUT, raw or "")
		identifier = classify_identifier(raw, self.context.request_type)
		self.identifier = identifier
		if identifier is None:
			return None
		if identifier.kind is IdentifierKind.DOI:
			self.host.set_value(DOI_FIELD, identifier.value)
		elif identifier.kind is IdentifierKind.ISBN:
			self.host.set_value(DOI_FIELD, GOOGLE_BOOKS_MARKER)
		logger.debug(f"Identifier set to {identifier.kind.value} {identifier.value!r}")
		return identifier

	def submit(self) -> None:
		self.host.click(HOST_SUBMIT_BUTTON)

	def update_order_request(self) -> None:
		self.host.set_value(WANTED_BY_FIELD, self.host.get_value(SUGGEST_TYPE))

	def clear(self) -> None:
		"""User-initiated clear: reload the page and forget everything."""
		self._token += 1
		self._cancel(self._task)
		self._cancel(self._access_task)
		self._task = None
		self._access_task = None
		self._reset()
		self.host.reload()
		self.start()

	# --------------------------
	# Resolution
	# --------------------------

	@asynccontextmanager
	async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
		if self._client is not None:
			yield self._client
			return
		async with build_client() as client:
			yield client

	def _is_current(self, token: int) -> bool:
		return token == self._token

	@staticmethod
	def _cancel(task: Optional[asyncio.Task]) -> None:
		if task is not None and not task.done():
			task.cancel()

	def submit_resolve(self) -> asyncio.Task:
		"""Start :meth:`resolve` as a task, cancelling one still in flight."""
		self._cancel(self._task)
		self._task = asyncio.create_task(self.resolve())
		return self._task

	async def resolve(self) -> Optional[ResolveState]:
		"""Resolve the current identifier and fill the form.

		Returns the final state of this attempt, or None when the attempt was
		superseded by a newer one (or by a clear) before it finished.
		"""
		if not self.enabled or self.identifier is None:
			return self.state
		self._token += 1
		token = self._token
		self._cancel(self._access_task)
		self._access_task = None
		self.open_access_url = None
		entered = self.identifier
		working = entered
		self.state = ResolveState.RESOLVING_PRIMARY
		logger.info(f"Resolving {entered.kind.value} {entered.value!r}")
		try:
			async with self._session() as client:
				if entered.kind is IdentifierKind.ISBN:
					record = await lookup_isbn(client, entered.value)
				elif entered.kind is IdentifierKind.DOI:
					record = await resolve_doi(client, entered.value)
				else:
					doi = await find_doi(client, entered.value)
					if not self._is_current(token):
						return self._superseded(entered)
					working = Identifier(value=doi, kind=IdentifierKind.DOI)
					self.state = ResolveState.RESOLVING_FALLBACK_DOI
					logger.info(f"PMID {entered.value} resolved to DOI {doi}; fetching citation")
					record = await resolve_doi(client, doi)
		except ResolutionError as e:
			if not self._is_current(token):
				return self._superseded(entered)
			self._fail(entered.kind, e)
			return self.state
		if not self._is_current(token):
			return self._superseded(entered)
		self._apply(record, working)
		self._check_full_access(record, working, token)
		return self.state

	def _superseded(self, entered: Identifier) -> Optional[ResolveState]:
		logger.warning(f"Dropping stale result for {entered.kind.value} {entered.value!r}")
		return None

	def _apply(self, record: CitationRecord, resolved: Identifier) -> None:
		self.citation = record
		self.resolved_identifier = resolved
		self.error = None
		if self.field_map is not None:
			for field_id, value in field_values(record, self.field_map, self._settings.publisher_placeholder).items():
				self.host.set_value(field_id, value)
		if record.origin is IdentifierKind.ISBN:
			self._show_book_preview(record)
			self.host.set_visible(SUGGEST_ORDER, True)
			self.host.set_visible(RESOLVE_OPTIONS, True)
			self.host.set_visible(RESOLVE_RESULT, True)
			self.host.set_visible(RESOLVE_ERROR, False)
		else:
			self.host.set_visible(RESOLVE_ERROR, False)
			self.host.set_visible(SUGGEST_ORDER, False)
			self.host.set_visible(RESOLVE_OPTIONS, True)
		self.state = ResolveState.DONE
		logger.info(f"Populated form from {record.origin.value} record: {record.display_title!r}")

	def _show_book_preview(self, record: CitationRecord) -> None:
		if record.thumbnail:
			self.host.set_image(THUMBNAIL, record.thumbnail)
		title = html.escape(record.display_title or "")
		author = html.escape(record.authors or "")
		publisher = html.escape(record.publisher or self._settings.publisher_placeholder)
		date = html.escape(record.date or "")
		isbn = html.escape(record.isxn or "")
		self.host.set_text(
			RESOLVE_RESULT_BODY,
			f"<h3>{title}</h3> <p>{author} <br> {publisher}: {date} <br>ISBN: {isbn}</p>",
		)

	def _fail(self, kind: IdentifierKind, exc: ResolutionError) -> None:
		logger.warning(f"Could not resolve {kind.value}: {exc}")
		self.citation = None
		self.resolved_identifier = None
		self.state = ResolveState.FAILED
		self.error = error_message(kind)
		self._clear_fields()
		self.host.set_text(RESOLVE_ERROR, self.error)
		self.host.set_visible(RESOLVE_ERROR, True)

	def _clear_fields(self) -> None:
		self.host.set_visible(RESOLVE_OPTIONS, False)
		self.host.set_visible(RESOLVE_RESULT, False)
		self.host.set_visible(FULL_ACCESS_BUTTON, False)
		for field_id in self.host.input_ids():
			if field_id != USER_DATE_FIELD:
				self.host.set_value(field_id, "")
		self.host.set_value(NOTES_FIELD, "")
		self.host.set_value(CITED_IN_FIELD, "")

	# --------------------------
	# Full access
	# --------------------------

	def _check_full_access(self, record: CitationRecord, resolved: Identifier, token: int) -> None:
		self.host.set_visible(FULL_ACCESS_BUTTON, False)
		if record.origin is IdentifierKind.ISBN:
			if record.viewability == FULL_VIEW:
				self.host.set_visible(FULL_ACCESS_BUTTON, True)
			return
		self._access_task = asyncio.create_task(self._lookup_open_access(resolved.value, token))

	async def _lookup_open_access(self, identifier: str, token: int) -> None:
		async with self._session() as client:
			url = await find_open_access_url(client, identifier)
		if not self._is_current(token):
			return
		if url:
			self.open_access_url = url
			if self.citation is not None:
				self.citation.open_access_url = url
			self.host.set_visible(FULL_ACCESS_BUTTON, True)
			logger.info(f"Open access copy available at {url}")

	async def wait_for_access_check(self) -> None:
		if self._access_task is not None:
			await self._access_task

	def full_access_url(self) -> Optional[str]:
		record = self.citation
		resolved = self.resolved_identifier
		if record is None or resolved is None:
			return None
		if record.origin is IdentifierKind.ISBN:
			if record.viewability == FULL_VIEW:
				return self._settings.books_search_url + resolved.value
			return None
		return self.open_access_url

	def open_full_access(self) -> Optional[str]:
		"""Open the full-text link for the live record in a new tab."""
		url = self.full_access_url()
		if url:
			self.host.open_url(url)
		return url


async def resolve_identifier(
	request_type: RequestType,
	identifier: str,
	client: Optional[httpx.AsyncClient] = None,
) -> ResolveResponse:
	host = FormState.for_request_type(request_type)
	resolver = Resolver(RequestContext.for_request_type(request_type), host, client=client)
	resolver.start()
	resolver.set_identifier(identifier)
	state = await resolver.resolve()
	await resolver.wait_for_access_check()
	return ResolveResponse(
		request_type=request_type,
		identifier=resolver.resolved_identifier or resolver.identifier,
		state=state or resolver.state,
		fields=host.filled(),
		visible=sorted(host.visible),
		error=resolver.error,
		full_access_url=resolver.full_access_url(),
	)
