"""Binding of annotated interface methods to HTTP request and response parts."""

from __future__ import annotations

from transportgen.api import (
    Function,
    HTTPMethod,
    Interface,
    Placeholder,
    TagError,
    TArray,
    TName,
    TPointer,
)

_INT_TYPES = frozenset(
    {"int", "int8", "int16", "int32", "int64", "uint", "uint8", "uint16", "uint32", "uint64"}
)
_OCTET_STREAM = "application/octet-stream"
_MULTIPART = "multipart/form-data"


def _is_int(tp) -> bool:
    return str(tp) in _INT_TYPES


def _is_string(tp) -> bool:
    return str(tp) == "string"


def _tag_words(doc: str, tag_mark: str):
    """Words after the tag mark of an annotated comment line, or None."""
    text = doc.strip().removeprefix("//").strip()
    if not text.startswith(tag_mark):
        return None
    return text[len(tag_mark):].strip().split(" ")


class HTTPMethodProcessor:
    """Reads a method's annotations and sorts its arguments and results."""

    def __init__(self, tag_mark: str, tags_parser):
        self.tag_mark = tag_mark
        self.tags_parser = tags_parser

    def process(self, http_method: HTTPMethod, iface: Interface, method: Function) -> None:
        """Fill ``http_method`` from the annotations and signature of ``method``.

        Raises TagError when the annotations and the signature disagree.
        """
        for doc in method.docs:
            words = _tag_words(doc, self.tag_mark)
            if words is not None:
                self.tags_parser.parse(http_method, words[0], *words[1:])

        args = method.args[1:]
        body = {arg.name: str(arg.type) for arg in args}

        for label, placeholder in http_method.additional_metrics_labels.items():
            for arg in args:
                if label not in body:
                    raise TagError(f"parameter {label} does not exist in method {method.name}")
                if arg.name == placeholder.name:
                    self._cast_metrics_label(label, arg.type, http_method)

        for key, placeholder in http_method.query_placeholders.items():
            body.pop(placeholder.name, None)
            for arg in args:
                if arg.name == placeholder.name:
                    self._cast_query(key, arg.type, http_method)

        for name in http_method.header_placeholders.values():
            body.pop(name, None)
        for name in http_method.cookie_placeholders.values():
            body.pop(name, None)
        for name in http_method.uri_path_placeholders:
            body.pop(name, None)

        if http_method.method == "GET" and body:
            raise TagError(
                f"http method GET could not have request body in {iface.rel_output_path} "
                f"interface {iface.iface.name} method {method.name}"
            )
        http_method.body = body
        if body:
            http_method.body_placeholders = {}
            for arg in args:
                if arg.name in body:
                    http_method.body_placeholders[arg.name] = Placeholder(name=arg.name)
                    self._cast_body(arg.name, arg.type, http_method)

        results = method.results[:-1]
        octet_error = TagError(
            f"http method with {_OCTET_STREAM} content type expects 1 body or return "
            f"parameter, but got {len(results)} in {iface.rel_output_path} "
            f"interface {iface.iface.name} method {method.name}"
        )
        if http_method.content_type == _OCTET_STREAM and len(http_method.body_placeholders) != 1:
            raise octet_error
        if http_method.response_content_type == _OCTET_STREAM and len(results) != 1:
            raise octet_error

        response_body = {res.name: str(res.type) for res in results}
        for name in http_method.response_headers.values():
            response_body.pop(name, None)
        http_method.response_body = response_body

    def _cast_query(self, key: str, tp, http_method: HTTPMethod) -> None:
        placeholder = http_method.query_placeholders[key]
        if isinstance(tp, TName):
            if _is_int(tp):
                placeholder.is_int = True
                http_method.is_int_query_placeholders = True
            elif _is_string(tp):
                placeholder.is_string = True
            placeholder.type = str(tp)
        elif isinstance(tp, TPointer):
            placeholder.is_pointer = True
            self._cast_query(key, tp.next, http_method)

    def _cast_metrics_label(self, label: str, tp, http_method: HTTPMethod) -> None:
        placeholder = http_method.additional_metrics_labels[label]
        if isinstance(tp, TPointer):
            placeholder.is_pointer = True
            tp = tp.next
        elif not isinstance(tp, TName):
            raise TagError(
                "only strings, ints and pointers on them are allowed as addition metrics "
                f"labels: method: {http_method.method} {http_method.uri_path} variable: {label}"
            )
        if _is_int(tp):
            placeholder.is_int = True
        elif _is_string(tp):
            placeholder.is_string = True

    def _cast_body(self, name: str, tp, http_method: HTTPMethod) -> None:
        placeholder = http_method.body_placeholders[name]
        if isinstance(tp, TName):
            if _is_int(tp):
                placeholder.is_int = True
                if http_method.content_type == _MULTIPART:
                    http_method.is_int_body_placeholders = True
            elif _is_string(tp):
                placeholder.is_string = True
            placeholder.type = str(tp)
        elif isinstance(tp, TPointer):
            placeholder.is_pointer = True
            self._cast_body(name, tp.next, http_method)
        elif isinstance(tp, TArray):
            placeholder.type = str(tp)