from __future__ import annotations

from typing import Optional

from .schemas import IdentifierKind


class ResolutionError(Exception):
	"""Raised by a source client when an identifier cannot be resolved."""

	def __init__(self, kind: IdentifierKind, message: str, status_code: Optional[int] = None) -> None:
		super().__init__(message)
		self.kind = kind
		self.status_code = status_code


class NotFoundError(ResolutionError):
	"""Empty or absent result, or a 404 from the upstream service."""


class MalformedIdentifierError(ResolutionError):
	"""Identifier rejected before any network call."""


class UnexpectedStatusError(ResolutionError):
	"""Upstream answered with a status other than 200 or 404."""


class UpstreamUnavailableError(ResolutionError):
	"""Timeout or transport failure talking to the upstream service."""


class FieldMapError(ValueError):
	"""The request-type field map is inconsistent with the form."""
