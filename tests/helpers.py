"""Fakes and helpers shared by the test modules."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import httpx

from ill_resolver.form import FormState
from ill_resolver.resolver import Resolver
from ill_resolver.schemas import RequestContext, RequestType, ResolveState

BOOKS_HOST = "www.googleapis.com"
DOI_HOST = "doi.org"
PUBMED_HOST = "eutils.ncbi.nlm.nih.gov"
OA_HOST = "bg.api.oa.works"

Reply = Union[Tuple[int, Any], Callable[[httpx.Request], Any]]


class FakeUpstream:
	"""Answers requests by host; unknown hosts get a 404."""

	def __init__(self, replies: Optional[Dict[str, Reply]] = None) -> None:
		self.replies: Dict[str, Reply] = dict(replies or {})
		self.requests: List[httpx.Request] = []

	def __call__(self, request: httpx.Request) -> Any:
		self.requests.append(request)
		reply = self.replies.get(request.url.host)
		if reply is None:
			return httpx.Response(404, json={})
		if callable(reply):
			return reply(request)
		status, body = reply
		return httpx.Response(status, json=body)

	def hosts(self) -> List[str]:
		return [r.url.host for r in self.requests]

	def client(self) -> httpx.AsyncClient:
		return httpx.AsyncClient(transport=httpx.MockTransport(self), follow_redirects=True)


def run_resolver(
	request_type: RequestType,
	raw: str,
	upstream: FakeUpstream,
	values: Optional[Dict[str, str]] = None,
) -> Tuple[Resolver, FormState, Optional[ResolveState]]:
	"""Start a resolver on a fresh form, enter ``raw`` and resolve it."""
	host = FormState.for_request_type(request_type, values)

	async def go() -> Tuple[Resolver, Optional[ResolveState]]:
		async with upstream.client() as client:
			resolver = Resolver(RequestContext.for_request_type(request_type), host, client=client)
			resolver.start()
			resolver.set_identifier(raw)
			state = await resolver.resolve()
			await resolver.wait_for_access_check()
			return resolver, state

	resolver, state = asyncio.run(go())
	return resolver, host, state


def books_payload(volume_info: Dict[str, Any], viewability: str = "NO_PAGES") -> Dict[str, Any]:
	return {
		"totalItems": 1,
		"items": [{"volumeInfo": volume_info, "accessInfo": {"viewability": viewability}}],
	}


CSL_ARTICLE: Dict[str, Any] = {
	"type": "journal-article",
	"container-title": "Journal of Examples",
	"title": "On Testing Resolvers",
	"author": [{"given": "Jane", "family": "Doe"}, {"given": "John", "family": "Smith"}],
	"issued": {"date-parts": [[2019, 7, 2]]},
	"ISSN": ["1234-5678", "8765-4321"],
	"publisher": "Example Press",
	"volume": "12",
	"issue": "3",
	"page": "101-110",
}
