from __future__ import annotations

from typing import Dict, List, Optional, Protocol, Set

from .mapping import FIELD_MAPS
from .schemas import RequestType

# Element ids on the host page
IDENTIFIER_INPUT = "identifier"
RESOLVE_CONTAINER = "resolve-container"
RESOLVE_OPTIONS = "resolve-options"
RESOLVE_RESULT = "resolve-result"
RESOLVE_RESULT_BODY = "resolve-result-body"
RESOLVE_ERROR = "resolve-error"
SUGGEST_ORDER = "suggest-order"
SUGGEST_TYPE = "suggest-type"
FULL_ACCESS_BUTTON = "full-access-btn"
INPUT_TYPE_LABEL = "input-type"
THUMBNAIL = "thumbnail"
HOST_SUBMIT_BUTTON = "buttonSubmitRequest"

DOI_FIELD = "DOI"
NOTES_FIELD = "Notes"
CITED_IN_FIELD = "CitedIn"
WANTED_BY_FIELD = "WantedBy"
USER_DATE_FIELD = "user-date"

_COMMON_INPUTS = ("ISSN", CITED_IN_FIELD, DOI_FIELD, WANTED_BY_FIELD, USER_DATE_FIELD)


class FormHost(Protocol):
	"""What the resolver needs from the page hosting the request form."""

	def get_value(self, field_id: str) -> str:
		...

	def set_value(self, field_id: str, value: str) -> None:
		...

	def input_ids(self) -> List[str]:
		"""Ids of the request inputs that a failed lookup blanks."""

	def set_visible(self, element_id: str, visible: bool) -> None:
		...

	def set_text(self, element_id: str, text: str) -> None:
		...

	def set_placeholder(self, field_id: str, text: str) -> None:
		...

	def set_image(self, element_id: str, src: str) -> None:
		...

	def open_url(self, url: str) -> None:
		"""Open ``url`` in a new tab."""

	def click(self, element_id: str) -> None:
		...

	def reload(self) -> None:
		...


class FormState:
	"""In-memory form host used by the CLI, the HTTP API and the tests."""

	def __init__(self, inputs: List[str], values: Optional[Dict[str, str]] = None) -> None:
		self._inputs = list(inputs)
		self.values: Dict[str, str] = {field_id: "" for field_id in inputs}
		self.values.update({NOTES_FIELD: "", SUGGEST_TYPE: "", IDENTIFIER_INPUT: ""})
		self.values.update(values or {})
		self.visible: Set[str] = set()
		self.texts: Dict[str, str] = {}
		self.placeholders: Dict[str, str] = {}
		self.images: Dict[str, str] = {}
		self.opened: List[str] = []
		self.clicks: List[str] = []
		self.reloads = 0

	@classmethod
	def for_request_type(cls, request_type: RequestType, values: Optional[Dict[str, str]] = None) -> "FormState":
		inputs: List[str] = []
		field_map = FIELD_MAPS.get(request_type)
		if field_map is not None:
			inputs.extend(field_map.field_ids())
		inputs.extend([i for i in _COMMON_INPUTS if i not in inputs])
		return cls(inputs, values)

	def get_value(self, field_id: str) -> str:
		return self.values.get(field_id, "")

	def set_value(self, field_id: str, value: str) -> None:
		self.values[field_id] = value

	def input_ids(self) -> List[str]:
		return list(self._inputs)

	def set_visible(self, element_id: str, visible: bool) -> None:
		if visible:
			self.visible.add(element_id)
		else:
			self.visible.discard(element_id)

	def set_text(self, element_id: str, text: str) -> None:
		self.texts[element_id] = text

	def set_placeholder(self, field_id: str, text: str) -> None:
		self.placeholders[field_id] = text

	def set_image(self, element_id: str, src: str) -> None:
		self.images[element_id] = src

	def open_url(self, url: str) -> None:
		self.opened.append(url)

	def click(self, element_id: str) -> None:
		self.clicks.append(element_id)

	def reload(self) -> None:
		# A reload restores the page as served: blank inputs, nothing shown
		self.reloads += 1
		for field_id in list(self.values):
			self.values[field_id] = ""
		self.visible.clear()
		self.texts.clear()
		self.images.clear()

	def filled(self) -> Dict[str, str]:
		return {k: v for k, v in self.values.items() if v}
