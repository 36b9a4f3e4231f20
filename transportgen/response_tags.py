"""Chain-of-responsibility parsers for response annotations."""

from __future__ import annotations

from transportgen.api import HTTPMethod, TagError
from transportgen.request_tags import TagParser


def _single(tags: list[str], message: str) -> str:
    if len(tags) != 1:
        raise TagError(message)
    return tags[0]


def _pair(tags: list[str], message: str) -> tuple[str, str]:
    if len(tags) != 2:
        raise TagError(message)
    return tags[0], tags[1]


class ResponseBody(TagParser):
    """The result field that becomes the whole response body."""

    def handle(self, info: HTTPMethod, tags: list[str]) -> None:
        info.response_body_field = _single(tags, "http body did not set")


class ContentEncoding(TagParser):
    """The charset of the response."""

    def handle(self, info: HTTPMethod, tags: list[str]) -> None:
        info.response_content_encoding = _single(tags, "http content encoding did not set")


class ResponseContentType(TagParser):
    """The response content type."""

    def handle(self, info: HTTPMethod, tags: list[str]) -> None:
        info.response_content_type = _single(tags, "http content type did not set")


class File(TagParser):
    """A result sent as raw bytes, optionally with a file name result."""

    def handle(self, info: HTTPMethod, tags: list[str]) -> None:
        if len(tags) == 1:
            info.response_file = tags[0]
        elif len(tags) == 2:
            info.response_file, info.response_file_name = tags
        else:
            raise TagError("http byte data did not set")


class ResponseHeader(TagParser):
    """A response header filled from a result: ``Name {result}``."""

    def handle(self, info: HTTPMethod, tags: list[str]) -> None:
        name, target = _pair(tags, "http header did not set")
        info.response_headers[name] = target.strip().lstrip("{").rstrip("}")


class ResponseJSONTag(TagParser):
    """The JSON name of a response body field."""

    def handle(self, info: HTTPMethod, tags: list[str]) -> None:
        result, name = _pair(tags, "http json tag did not set")
        info.response_json_tags[result] = name


class Status(TagParser):
    """The success status of the response."""

    def handle(self, info: HTTPMethod, tags: list[str]) -> None:
        info.response_status = _single(tags, "http response status did not set")