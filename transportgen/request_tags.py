"""Chain-of-responsibility parsers for request and logging annotations.

Each parser owns one tag, recognised by a prefix and a suffix. A tag it does
not recognise is passed to the next parser; the chain ends with ``Term``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from transportgen.api import HTTPMethod, Placeholder, TagError

_LOG_IGNORE_SEPARATOR = ","


class Term:
    """End of a parser chain: unknown tags are silently ignored."""

    def parse(self, info, first_tag: str, *args: str) -> None:
        return None


class TagParser(ABC):
    """A parser for one tag, delegating other tags to the next parser."""

    def __init__(self, prefix: str, suffix: str = "", next_parser: Optional[object] = None):
        self.prefix = prefix
        self.suffix = suffix
        self.next = next_parser if next_parser is not None else Term()

    def parse(self, info, first_tag: str, *args: str) -> None:
        """Apply the tag to ``info`` or hand it down the chain."""
        if first_tag.startswith(self.prefix) and first_tag.endswith(self.suffix):
            self.handle(info, list(args))
            return
        self.next.parse(info, first_tag, *args)

    @abstractmethod
    def handle(self, info, tags: list[str]) -> None:
        """Apply the values following a recognised tag."""


def _single(tags: list[str], message: str) -> str:
    if len(tags) != 1:
        raise TagError(message)
    return tags[0]


def _pair(tags: list[str], message: str) -> tuple[str, str]:
    if len(tags) != 2:
        raise TagError(message)
    return tags[0], tags[1]


def _placeholder_name(value: str) -> str:
    return value.strip().lstrip("{").rstrip("}")


class Method(TagParser):
    """The HTTP method of the endpoint."""

    def handle(self, info: HTTPMethod, tags: list[str]) -> None:
        info.method = _single(tags, "http errorProcessor did not set")


class APIPath(TagParser):
    """The API path of the endpoint."""

    def handle(self, info: HTTPMethod, tags: list[str]) -> None:
        info.api_path = _single(tags, "http api path did not set")


class ContentType(TagParser):
    """The request content type."""

    def handle(self, info: HTTPMethod, tags: list[str]) -> None:
        info.content_type = _single(tags, "http content type did not set")


class Cookie(TagParser):
    """A cookie bound to a method argument: ``name {arg}``."""

    def handle(self, info: HTTPMethod, tags: list[str]) -> None:
        name, target = _pair(tags, "http cookie did not set")
        info.cookie_placeholders[name] = _placeholder_name(target)


class ErrorProcessor(TagParser):
    """The error processor used by the endpoint."""

    def handle(self, info: HTTPMethod, tags: list[str]) -> None:
        info.error_processor = _single(tags, "http errorProcessor did not set")


class FormUrlencodedTag(TagParser):
    """An url-encoded form field bound to a method argument."""

    def handle(self, info: HTTPMethod, tags: list[str]) -> None:
        arg, name = _pair(tags, "http xxx-form-urlencoded value tag did not set")
        info.form_urlencoded_tags[arg] = name


class Header(TagParser):
    """A request header bound to a method argument: ``Name {arg}``."""

    def handle(self, info: HTTPMethod, tags: list[str]) -> None:
        name, target = _pair(tags, "http header did not set")
        info.header_placeholders[name] = _placeholder_name(target)


class JSONTag(TagParser):
    """The JSON name of a request body field."""

    def handle(self, info: HTTPMethod, tags: list[str]) -> None:
        arg, name = _pair(tags, "http json tag did not set")
        if info.plain_object:
            raise TagError(
                "http json tag and plain object are incompatible, "
                "please use on of them exclusively"
            )
        info.json_tags[arg] = name


class MultipartFileTag(TagParser):
    """A multipart file part bound to a method argument."""

    def handle(self, info: HTTPMethod, tags: list[str]) -> None:
        arg, name = _pair(tags, "http multipart file tag did not set")
        info.multipart_file_tags[arg] = name


class MultipartValueTag(TagParser):
    """A multipart value part bound to a method argument."""

    def handle(self, info: HTTPMethod, tags: list[str]) -> None:
        arg, name = _pair(tags, "http multipart value tag did not set")
        info.multipart_value_tags[arg] = name


class PlainObjectTag(TagParser):
    """Marks the one argument that is the whole request body."""

    def handle(self, info: HTTPMethod, tags: list[str]) -> None:
        name = _single(
            tags, "http plain object tag incorrect, should be one value with param name"
        )
        if info.plain_object:
            raise TagError("http plain object should be only one")
        if info.json_tags:
            raise TagError(
                "http json tag and plain object are incompatible, "
                "please use on of them exclusively"
            )
        info.plain_object = name


class Query(TagParser):
    """Query parameters: ``a={arg}&b={other}``; malformed pairs are skipped."""

    def handle(self, info: HTTPMethod, tags: list[str]) -> None:
        query = _single(tags, "http query did not set")
        placeholders = {}
        for pair in query.split("&"):
            parts = pair.split("=")
            if len(parts) != 2:
                continue
            key, value = parts
            placeholders[key] = Placeholder(name=value.lstrip("{").rstrip("}"))
        info.query_placeholders = placeholders


class URIPath(TagParser):
    """The URI path with ``{arg}`` placeholders.

    Sets the router form (``:arg``) and the client format (``%s``).
    """

    def handle(self, info: HTTPMethod, tags: list[str]) -> None:
        raw = _single(tags, "http uri path did not set")
        head, *rest = raw.split("{")
        server_parts = [head]
        client_parts = [head]
        for part in rest:
            pieces = part.split("}")
            info.uri_path_placeholders.append(pieces[0])
            server_parts.append("".join(pieces))
            client_parts.append("".join(["s", *pieces[1:]]))
        info.uri_path = ":".join(server_parts)
        info.client_uri_path = "%".join(client_parts)
        info.raw_uri_path = raw


class LogIgnore(TagParser):
    """Comma separated arguments and results left out of logs."""

    def handle(self, info: HTTPMethod, tags: list[str]) -> None:
        if not tags:
            raise TagError("log ignore fields did not set")
        joined = " ".join(tags)
        info.log_ignores = [name.strip() for name in joined.split(_LOG_IGNORE_SEPARATOR)]