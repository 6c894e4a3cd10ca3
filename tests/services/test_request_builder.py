"""Tests for authorized TMDB request construction."""

from urllib.parse import parse_qs, urlsplit

from taxaoverlap.services.credentials import classify
from taxaoverlap.services.request_builder import build_request

from conftest import API_KEY, BEARER_TOKEN

BASE_URL = "https://api.themoviedb.org/3"


class TestBuildRequest:
    """Test build_request."""

    def test_api_key_goes_into_query(self):
        """Test that a v3 key is sent as the api_key parameter only."""
        request = build_request(
            BASE_URL,
            "/search/tv",
            {"query": "Taxa", "language": "da-DK"},
            classify(API_KEY),
        )

        parts = urlsplit(request.url)
        assert f"{parts.scheme}://{parts.netloc}{parts.path}" == f"{BASE_URL}/search/tv"
        assert parse_qs(parts.query) == {
            "query": ["Taxa"],
            "language": ["da-DK"],
            "api_key": [API_KEY],
        }
        assert "Authorization" not in request.headers
        assert request.headers["accept"] == "application/json"

    def test_bearer_goes_into_header(self):
        """Test that a bearer token is sent as Authorization header only."""
        request = build_request(BASE_URL, "/tv/1/aggregate_credits", None, classify(BEARER_TOKEN))

        assert request.url == f"{BASE_URL}/tv/1/aggregate_credits"
        assert request.headers["Authorization"] == f"Bearer {BEARER_TOKEN}"

    def test_empty_values_are_dropped(self):
        """Test that None and empty string parameters are omitted."""
        request = build_request(
            BASE_URL,
            "/search/movie",
            {"query": "x", "language": "", "page": None},
            classify(BEARER_TOKEN),
        )

        assert parse_qs(urlsplit(request.url).query) == {"query": ["x"]}

    def test_booleans_are_lower_case(self):
        """Test that booleans are rendered as true/false."""
        request = build_request(
            BASE_URL,
            "/search/tv",
            {"include_adult": False},
            classify(BEARER_TOKEN),
        )

        assert request.url.endswith("?include_adult=false")

    def test_query_is_encoded(self):
        """Test that special characters in parameters are percent-encoded."""
        request = build_request(BASE_URL, "/search/tv", {"query": "Æ & Ø"}, classify(API_KEY))

        assert "query=%C3%86+%26+%C3%98" in request.url

    def test_trailing_slash_in_base_url(self):
        """Test that a trailing slash in the base URL is not doubled."""
        request = build_request(f"{BASE_URL}/", "/movie/5/credits", None, classify(BEARER_TOKEN))

        assert request.url == f"{BASE_URL}/movie/5/credits"
