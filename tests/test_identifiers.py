"""Tests for identifier classification and normalization."""

import pytest

from ill_resolver.schemas import IdentifierKind, RequestType
from ill_resolver.utils.identifiers import classify_identifier, is_pmid, normalize_doi


# ── DOI normalization ────────────────────────────────────────────────


def test_normalize_doi_rewrites_scheme_and_host():
	assert normalize_doi("http://dx.doi.org/10.1155/2019/9613090") == "https://doi.org/10.1155/2019/9613090"


@pytest.mark.parametrize(
	"raw, expected",
	[
		("10.1000/xyz.", "10.1000/xyz"),
		("10.1000/xyz..", "10.1000/xyz."),
		("10.1000/xyz", "10.1000/xyz"),
	],
)
def test_normalize_doi_strips_exactly_one_trailing_period(raw, expected):
	assert normalize_doi(raw) == expected


# ── Classification ───────────────────────────────────────────────────


@pytest.mark.parametrize("request_type", [RequestType.ARTICLE, RequestType.CONFERENCE])
def test_article_pages_treat_10_dot_as_doi(request_type):
	ident = classify_identifier("  http://dx.doi.org/10.1038/171737a0. ", request_type)
	assert ident.kind is IdentifierKind.DOI
	assert ident.value == "https://doi.org/10.1038/171737a0"


def test_article_pages_treat_other_input_as_pmid():
	ident = classify_identifier("3-1452-757", RequestType.ARTICLE)
	assert ident.kind is IdentifierKind.PMID
	assert ident.value == "31452757"


@pytest.mark.parametrize(
	"request_type",
	[RequestType.BOOK, RequestType.BOOK_CHAPTER, RequestType.TABLE_OF_CONTENTS, RequestType.OTHER],
)
def test_other_pages_treat_input_as_isbn(request_type):
	ident = classify_identifier("978-1-338-87898-1", request_type)
	assert ident.kind is IdentifierKind.ISBN
	assert ident.value == "9781338878981"


def test_isbn_containing_10_dot_is_still_an_isbn_on_book_pages():
	ident = classify_identifier("10.5", RequestType.BOOK)
	assert ident.kind is IdentifierKind.ISBN


def test_blank_input_has_no_identifier():
	assert classify_identifier("   ", RequestType.BOOK) is None
	assert classify_identifier(None, RequestType.ARTICLE) is None


def test_is_pmid():
	assert is_pmid("31452757")
	assert not is_pmid("3145a757")
	assert not is_pmid("")
