from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional


def invert_name(name: Optional[str]) -> Optional[str]:
	# "Jane Q. Doe" -> "Doe, Jane"; middle tokens are dropped
	if not name:
		return None
	parts = name.split()
	if not parts:
		return None
	if len(parts) == 1:
		return parts[0]
	return f"{parts[-1]}, {parts[0]}"


def csl_name(author: Dict[str, Any]) -> str:
	name_parts = [author.get("given"), author.get("family")]
	name = " ".join([str(p) for p in name_parts if p])
	return name or str(author.get("literal") or "")


def join_csl_authors(authors: Optional[Iterable[Dict[str, Any]]]) -> Optional[str]:
	names: List[str] = [csl_name(a) for a in authors or [] if isinstance(a, dict)]
	joined = ", ".join([n for n in names if n])
	return joined or None


def year_prefix(text: Optional[str]) -> Optional[str]:
	if not text:
		return None
	return text[:4]


def as_text(value: Any) -> Optional[str]:
	if value is None or value == "":
		return None
	return str(value)
