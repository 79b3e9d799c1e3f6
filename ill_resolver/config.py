from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class AppSettings(BaseSettings):
	# Upstream endpoints
	books_api_url: str = Field(default="https://www.googleapis.com/books/v1/volumes", alias="BOOKS_API_URL")
	books_search_url: str = Field(
		default="https://www.google.com/search?tbm=bks&q=",
		alias="BOOKS_SEARCH_URL",
		description="Prefix for the full-access link of a fully viewable book; the ISBN is appended.",
	)
	doi_resolver_url: str = Field(default="https://doi.org/", alias="DOI_RESOLVER_URL")
	esummary_url: str = Field(
		default="https://eutils.ncbi.nlm.nih.gov/entrez/eutils/esummary.fcgi",
		alias="ESUMMARY_URL",
	)
	open_access_url: str = Field(default="https://bg.api.oa.works/find", alias="OPEN_ACCESS_URL")

	# HTTP behaviour
	http_timeout_s: float = Field(default=30.0, alias="HTTP_TIMEOUT_S")
	user_agent: str = Field(default="ill-resolver/0.1", alias="USER_AGENT")

	# Form defaults
	publisher_placeholder: str = Field(default="publisher not listed", alias="PUBLISHER_PLACEHOLDER")

	class Config:
		env_file = ".env"
		case_sensitive = False


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
	return AppSettings()  # type: ignore[arg-type]
