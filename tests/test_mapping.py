"""Tests for the request-type field maps."""

import pytest

from ill_resolver.errors import FieldMapError
from ill_resolver.mapping import FIELD_MAPS, FieldMap, check_form_fields, field_values, validate_field_maps
from ill_resolver.schemas import CitationRecord, IdentifierKind, RequestType


def test_shipped_maps_are_valid():
	validate_field_maps(FIELD_MAPS)


def test_every_resolvable_request_type_has_a_map():
	assert set(FIELD_MAPS) == set(RequestType) - {RequestType.OTHER}


def test_missing_slot_is_rejected():
	broken = dict(FIELD_MAPS)
	broken[RequestType.BOOK] = FieldMap(title="LoanTitle")
	with pytest.raises(FieldMapError, match="publisher"):
		validate_field_maps(broken)


def test_conference_needs_publisher():
	broken = dict(FIELD_MAPS)
	broken[RequestType.CONFERENCE] = FIELD_MAPS[RequestType.ARTICLE]
	with pytest.raises(FieldMapError, match="publisher"):
		validate_field_maps(broken)


def test_duplicate_field_is_rejected():
	broken = dict(FIELD_MAPS)
	broken[RequestType.BOOK] = FIELD_MAPS[RequestType.BOOK].model_copy(update={"date": "LoanTitle"})
	with pytest.raises(FieldMapError, match="twice"):
		validate_field_maps(broken)


def test_check_form_fields_reports_unknown_inputs():
	with pytest.raises(FieldMapError, match="LoanAuthor"):
		check_form_fields(FIELD_MAPS[RequestType.BOOK], ["LoanTitle"])


def test_book_values_use_publisher_placeholder():
	record = CitationRecord(origin=IdentifierKind.ISBN, title="Dog Man", subtitle="Grime and Punishment", isxn="1")
	values = field_values(record, FIELD_MAPS[RequestType.BOOK], "publisher not listed")
	assert values["LoanTitle"] == "Dog Man: Grime and Punishment"
	assert values["LoanPublisher"] == "publisher not listed"
	assert values["LoanAuthor"] == ""
	assert values["LoanDate"] == ""
	assert values["ISSN"] == "1"


def test_chapter_values_land_in_photo_fields():
	record = CitationRecord(origin=IdentifierKind.ISBN, title="Collected Essays", authors="Doe, Jane", date="1999")
	values = field_values(record, FIELD_MAPS[RequestType.TABLE_OF_CONTENTS], "n/a")
	assert values["PhotoJournalTitle"] == "Collected Essays"
	assert values["PhotoItemAuthor"] == "Doe, Jane"
	assert values["PhotoJournalYear"] == "1999"


def test_article_values_leave_publisher_alone():
	record = CitationRecord(origin=IdentifierKind.DOI, title="A", journal_title="J", month="7")
	values = field_values(record, FIELD_MAPS[RequestType.ARTICLE], "n/a")
	assert "PhotoItemPublisher" not in values
	assert values["PhotoArticleTitle"] == "A"
	assert values["PhotoJournalTitle"] == "J"
	assert values["PhotoJournalMonth"] == "7"


def test_conference_values_include_publisher():
	record = CitationRecord(origin=IdentifierKind.DOI, title="A", publisher="IEEE")
	values = field_values(record, FIELD_MAPS[RequestType.CONFERENCE], "n/a")
	assert values["PhotoItemPublisher"] == "IEEE"
