"""Chain-of-responsibility parsers for OpenAPI description annotations."""

from __future__ import annotations

from typing import Optional

from transportgen.api import SwaggerInfo, TagError
from transportgen.request_tags import TagParser


class SwaggerTerm:
    """End of a swagger parser chain: unknown tags are ignored."""

    def parse(self, info, first_tag: str, *args: str) -> None:
        return None


class _SwaggerTagParser(TagParser):
    def __init__(self, prefix: str, suffix: str = "", next_parser: Optional[object] = None):
        super().__init__(prefix, suffix, next_parser if next_parser is not None else SwaggerTerm())


def _words(tags: list[str], message: str) -> str:
    if not tags:
        raise TagError(message)
    return "".join(f"{tag} " for tag in tags)


class Title(_SwaggerTagParser):
    """The document title."""

    def handle(self, info: SwaggerInfo, tags: list[str]) -> None:
        info.title = _words(tags, "swagger title did not set")


class Description(_SwaggerTagParser):
    """A description of the document or an operation."""

    def handle(self, info: SwaggerInfo, tags: list[str]) -> None:
        info.description = _words(tags, "swagger description did not set")


class Summary(_SwaggerTagParser):
    """A short summary of an operation."""

    def handle(self, info: SwaggerInfo, tags: list[str]) -> None:
        info.summary = _words(tags, "swagger summary did not set")


class Version(_SwaggerTagParser):
    """The API version, a single word."""

    def handle(self, info: SwaggerInfo, tags: list[str]) -> None:
        if len(tags) != 1:
            raise TagError("swagger version did not set")
        info.version = tags[0]


class Servers(_SwaggerTagParser):
    """A server URL followed by an optional description."""

    def handle(self, info: SwaggerInfo, tags: list[str]) -> None:
        if not tags:
            raise TagError("swagger servers did not set")
        url, *rest = tags
        info.servers.append({"url": url, "description": " ".join(rest)})