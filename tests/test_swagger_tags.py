import pytest

from transportgen.api import SwaggerInfo, TagError
from transportgen.swagger_tags import (
    Description,
    Servers,
    Summary,
    SwaggerTerm,
    Title,
    Version,
)


def _chain():
    parser = Version("swagger-version")
    parser = Servers("swagger-servers", next_parser=parser)
    parser = Summary("swagger-summary", next_parser=parser)
    parser = Description("swagger-description", next_parser=parser)
    return Title("swagger-title", next_parser=parser)


def test_title_joins_words_with_trailing_space():
    info = SwaggerInfo()
    _chain().parse(info, "swagger-title", "My", "API")
    assert info.title == "My API "


def test_description_and_summary():
    info = SwaggerInfo()
    chain = _chain()
    chain.parse(info, "swagger-description", "Long", "text")
    chain.parse(info, "swagger-summary", "Short")
    assert info.description == "Long text "
    assert info.summary == "Short "


def test_version_single_word():
    info = SwaggerInfo()
    _chain().parse(info, "swagger-version", "1.0.0")
    assert info.version == "1.0.0"


def test_version_rejects_many_words():
    with pytest.raises(TagError, match="swagger version did not set"):
        _chain().parse(SwaggerInfo(), "swagger-version", "1", "2")


def test_servers_accumulate():
    info = SwaggerInfo()
    chain = _chain()
    chain.parse(info, "swagger-servers", "http://localhost:8080")
    chain.parse(info, "swagger-servers", "http://example.com", "main", "server")
    assert info.servers == [
        {"url": "http://localhost:8080", "description": ""},
        {"url": "http://example.com", "description": "main server"},
    ]


@pytest.mark.parametrize(
    "tag, message",
    [
        ("swagger-title", "swagger title did not set"),
        ("swagger-description", "swagger description did not set"),
        ("swagger-summary", "swagger summary did not set"),
        ("swagger-servers", "swagger servers did not set"),
    ],
)
def test_missing_values(tag, message):
    with pytest.raises(TagError, match=message):
        _chain().parse(SwaggerInfo(), tag)


def test_unknown_tag_is_ignored():
    info = SwaggerInfo()
    _chain().parse(info, "http-method", "GET")
    assert info == SwaggerInfo()


def test_term_returns_none_and_changes_nothing():
    info = SwaggerInfo()
    assert SwaggerTerm().parse(info, "swagger-title", "x") is None
    assert info.title is None