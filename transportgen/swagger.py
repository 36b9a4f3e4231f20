"""OpenAPI document assembly from annotated service interfaces."""

from __future__ import annotations

import os
import posixpath
from typing import Any, Callable, Optional

from transportgen.api import (
    Function,
    GenerationInfo,
    GoFile,
    HTTPMethod,
    Interface,
    Struct,
    TArray,
    TEllipsis,
    TImport,
    TInterface,
    TMap,
    TName,
    TPointer,
    Variable,
)
from transportgen.api import is_builtin as _is_predeclared

_IN_PATH = "path"
_IN_HEADER = "header"
_IN_QUERY = "query"
_IN_COOKIE = "cookie"

_OPERATIONS = frozenset({"get", "put", "post", "delete", "options", "head", "patch", "trace"})

_EXTRA_BUILTINS = frozenset(
    {"uuid.UUID", "UUID", "json.RawMessage", "bson.ObjectId", "time.Time", "multipart.FileHeader"}
)

_INT_TYPES = frozenset(
    {"int", "int8", "int16", "int32", "int64", "uint", "uint8", "uint16", "uint32", "uint64"}
)

_STATUS_CODES = {
    "http.StatusContinue": "100",
    "http.StatusSwitchingProtocols": "101",
    "http.StatusProcessing": "102",
    "http.StatusEarlyHints": "103",
    "http.StatusOK": "200",
    "http.StatusCreated": "201",
    "http.StatusAccepted": "202",
    "http.StatusNonAuthoritativeInfo": "203",
    "http.StatusNoContent": "204",
    "http.StatusResetContent": "205",
    "http.StatusPartialContent": "206",
    "http.StatusMultiStatus": "207",
    "http.StatusAlreadyReported": "208",
    "http.StatusIMUsed": "226",
    "http.StatusMultipleChoices": "300",
    "http.StatusMovedPermanently": "301",
    "http.StatusFound": "302",
    "http.StatusSeeOther": "303",
    "http.StatusNotModified": "304",
    "http.StatusUseProxy": "305",
    "http.StatusTemporaryRedirect": "307",
    "http.StatusPermanentRedirect": "308",
    "http.StatusBadRequest": "400",
    "http.StatusUnauthorized": "401",
    "http.StatusPaymentRequired": "402",
    "http.StatusForbidden": "403",
    "http.StatusNotFound": "404",
    "http.StatusMethodNotAllowed": "405",
    "http.StatusNotAcceptable": "406",
    "http.StatusProxyAuthRequired": "407",
    "http.StatusRequestTimeout": "408",
    "http.StatusConflict": "409",
    "http.StatusGone": "410",
    "http.StatusLengthRequired": "411",
    "http.StatusPreconditionFailed": "412",
    "http.StatusRequestEntityTooLarge": "413",
    "http.StatusRequestURITooLong": "414",
    "http.StatusUnsupportedMediaType": "415",
    "http.StatusRequestedRangeNotSatisfiable": "416",
    "http.StatusExpectationFailed": "417",
    "http.StatusTeapot": "418",
    "http.StatusMisdirectedRequest": "421",
    "http.StatusUnprocessableEntity": "422",
    "http.StatusLocked": "423",
    "http.StatusFailedDependency": "424",
    "http.StatusTooEarly": "425",
    "http.StatusUpgradeRequired": "426",
    "http.StatusPreconditionRequired": "428",
    "http.StatusTooManyRequests": "429",
    "http.StatusRequestHeaderFieldsTooLarge": "431",
    "http.StatusUnavailableForLegalReasons": "451",
    "http.StatusInternalServerError": "500",
    "http.StatusNotImplemented": "501",
    "http.StatusBadGateway": "502",
    "http.StatusServiceUnavailable": "503",
    "http.StatusGatewayTimeout": "504",
    "http.StatusHTTPVersionNotSupported": "505",
    "http.StatusVariantAlsoNegotiates": "506",
    "http.StatusInsufficientStorage": "507",
    "http.StatusLoopDetected": "508",
    "http.StatusNotExtended": "510",
    "http.StatusNetworkAuthenticationRequired": "511",
}


def cast_status_const(value: str) -> str:
    """Numeric status for an ``http.StatusXxx`` name; other values pass through."""
    return _STATUS_CODES.get(value, value)


def cast_builtin_type(type_name) -> tuple[str, str]:
    """OpenAPI ``(type, format)`` for a builtin type; format may be empty."""
    name = str(type_name)
    if name == "bool":
        return "boolean", ""
    if name == "time.Time":
        return "string", "date-time"
    if name == "byte":
        return "string", "byte"
    if name == "uuid.UUID":
        return "string", "uuid"
    if name in ("float32", "float64"):
        return "number", "float"
    if name in _INT_TYPES:
        return "number", ""
    if name == "multipart.FileHeader":
        return "string", "binary"
    return name, ""


def _builtin_schema(tp) -> dict[str, Any]:
    type_name, fmt = cast_builtin_type(tp)
    schema: dict[str, Any] = {"type": type_name}
    if fmt:
        schema["format"] = fmt
    return schema


def _is_builtin(tp) -> bool:
    text = str(tp)
    if text.startswith("*"):
        text = text[1:]
    return _is_predeclared(tp) or text in _EXTRA_BUILTINS


def _field_is_private(name: str) -> bool:
    return name[0] != name[0].upper()


def _object_schema(properties: Optional[dict[str, Any]]) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "object"}
    if properties:
        schema["properties"] = properties
    return schema


class SwaggerProcessor:
    """Adds the operations of an annotated interface to the OpenAPI document.

    ``mod`` maps import paths to directories (``pkg_mod_path``) and
    ``file_parser`` turns a source file path into a ``GoFile``; both are used
    to find the structs that parameters and results refer to.
    """

    def __init__(
        self,
        tag_mark: str,
        http_method_processor,
        swagger_tags_parser,
        mod,
        go_generated_prefix: bytes,
        file_parser: Optional[Callable[[str], GoFile]] = None,
    ):
        self.tag_mark = tag_mark
        self.http_method_processor = http_method_processor
        self.swagger_tags_parser = swagger_tags_parser
        self.mod = mod
        self.go_generated_prefix = go_generated_prefix
        self.file_parser = file_parser

    def process(self, info: GenerationInfo, iface: Interface) -> None:
        """Add one operation per interface method to ``info.swagger``."""
        if info.swagger is None:
            info.swagger = self._new_document(info)
        for method in iface.iface.methods:
            http_method = HTTPMethod()
            try:
                self.http_method_processor.process(http_method, iface, method)
            except Exception as exc:
                raise RuntimeError(f"[swagger] http method {method.name}: {exc}") from exc
            self._parse_swagger_tags(http_method, method)

            paths = info.swagger.setdefault("paths", {})
            path_item = paths.setdefault(http_method.raw_uri_path, {})
            operation = self._operation(iface, http_method, method)
            verb = http_method.method.lower()
            if verb not in _OPERATIONS:
                raise ValueError(
                    f"[swagger] unsupported http method {http_method.method!r} "
                    f"in method {method.name}"
                )
            path_item[verb] = operation

    def _new_document(self, info: GenerationInfo) -> dict[str, Any]:
        source = info.swagger_info
        doc_info = {
            key: value
            for key, value in (
                ("title", source.title),
                ("description", source.description),
                ("version", source.version),
            )
            if value is not None
        }
        document: dict[str, Any] = {"info": doc_info}
        if source.servers:
            document["servers"] = [dict(server) for server in source.servers]
        return document

    def _parse_swagger_tags(self, http_method: HTTPMethod, method: Function) -> None:
        for doc in method.docs:
            text = doc.strip().removeprefix("//").strip()
            if not text.startswith(self.tag_mark):
                continue
            words = text[len(self.tag_mark):].strip().split(" ")
            try:
                self.swagger_tags_parser.parse(http_method.swagger_info, words[0], *words[1:])
            except Exception as exc:
                raise RuntimeError(f"[swagger] tags of method {method.name}: {exc}") from exc

    def _operation(self, iface: Interface, http_method: HTTPMethod, method: Function) -> dict:
        pkg = iface.rel_output_path
        query = {key: ph.name for key, ph in http_method.query_placeholders.items()}
        params = self._params(pkg, method.args, http_method.uri_path_placeholders, _IN_PATH, True)
        params += self._params(
            pkg, method.args, list(http_method.header_placeholders.values()), _IN_HEADER, False
        )
        params += self._params(pkg, method.args, list(query.values()), _IN_QUERY, False)
        params += self._params(
            pkg, method.args, list(http_method.cookie_placeholders.values()), _IN_COOKIE, False
        )

        request_body = None
        if http_method.body:
            properties = {}
            for name in http_method.body:
                for arg in method.args:
                    if arg.name == name:
                        properties[arg.name] = self._wrapped_type(pkg, arg.type, "request body")
            request_body = {
                "content": {http_method.content_type: {"schema": _object_schema(properties)}}
            }

        properties = {}
        for name in http_method.response_body:
            for res in method.results:
                if res.name == name:
                    key = http_method.response_json_tags.get(res.name, "")
                    properties[key] = self._wrapped_type(pkg, res.type, "response body")
        response: dict[str, Any] = {
            "description": "",
            "content": {
                http_method.response_content_type: {"schema": _object_schema(properties)}
            },
        }
        if http_method.response_headers:
            headers = {}
            for header, result_name in http_method.response_headers.items():
                for res in method.results:
                    if res.name == result_name:
                        headers[header] = {
                            "description": "",
                            "schema": self._wrapped_type(pkg, res.type, "response headers"),
                        }
            response["headers"] = headers

        operation: dict[str, Any] = {
            "tags": [posixpath.basename(iface.abs_output_path) + "/" + iface.iface.name],
        }
        if http_method.swagger_info.summary is not None:
            operation["summary"] = http_method.swagger_info.summary
        if http_method.swagger_info.description is not None:
            operation["description"] = http_method.swagger_info.description
        if params:
            operation["parameters"] = params
        if request_body is not None:
            operation["requestBody"] = request_body
        operation["responses"] = {cast_status_const(http_method.response_status): response}
        return operation

    def _wrapped_type(self, pkg_path: str, tp, where: str) -> dict[str, Any]:
        try:
            return self._make_type(pkg_path, tp)
        except Exception as exc:
            raise RuntimeError(f"[swagger] {where}: {exc}") from exc

    def _params(
        self, pkg: str, args: list[Variable], names: list[str], location: str, required: bool
    ) -> list[dict[str, Any]]:
        params: list[dict[str, Any]] = []
        for name in names:
            arg = next((arg for arg in args if arg.name == name), None)
            if arg is None:
                continue
            try:
                schema = self._make_type(pkg, arg.type)
            except Exception:
                return params
            params.append({"in": location, "name": name, "required": required, "schema": schema})
        return params

    def _make_type(self, pkg_path: str, tp) -> dict[str, Any]:
        if tp is None:
            return {}
        if isinstance(tp, (TName, Struct)):
            if _is_builtin(tp):
                return _builtin_schema(tp)
            name = tp.type_name if isinstance(tp, TName) else tp.name
            struct = self._search_struct_info(pkg_path, name)
            return _object_schema(self._fill_props(struct, pkg_path))
        if isinstance(tp, TImport):
            if _is_builtin(tp):
                return _builtin_schema(tp)
            struct = self._search_struct_info(tp.package, str(tp.next))
            try:
                properties = self._fill_props(struct, tp.package)
            except Exception:
                properties = self._fill_props(struct, pkg_path)
            return _object_schema(properties)
        if isinstance(tp, TArray):
            return {"type": "array", "items": self._make_type(pkg_path, tp.next)}
        if isinstance(tp, TEllipsis):
            return self._make_type(pkg_path, tp.next)
        if isinstance(tp, TMap):
            return {"type": "object"}
        if isinstance(tp, TPointer):
            schema = self._make_type(pkg_path, tp.next)
            schema["nullable"] = True
            return schema
        if isinstance(tp, TInterface):
            return {}
        raise ValueError(f"unknown type {tp}")

    def _fill_props(self, struct: Struct, pkg_path: str) -> Optional[dict[str, Any]]:
        props: dict[str, Any] = {}
        for fld in struct.fields:
            json_tags = fld.tags.get("json")
            if json_tags is not None:
                name = json_tags[0]
                if name != "-":
                    props[name] = self._make_type(pkg_path, fld.type)
                continue
            if fld.name and not _field_is_private(fld.name):
                props[fld.name] = self._make_type(pkg_path, fld.type)
        return props or None

    def _search_struct_info(self, pkg: str, name: str) -> Struct:
        last_error: Optional[Exception] = None
        candidates = (
            lambda: self.mod.pkg_mod_path(pkg),
            lambda: posixpath.normpath(posixpath.join("./vendor", pkg)),
            lambda: self._trim_local_pkg(pkg),
        )
        for candidate in candidates:
            try:
                found = self._get_struct_info(candidate(), name)
            except Exception as exc:
                last_error = exc
                continue
            last_error = None
            if found is not None:
                return found
        message = f"struct not found {pkg} {name}"
        if last_error is not None:
            raise LookupError(f"{message}: {last_error}") from last_error
        raise LookupError(message)

    def _get_struct_info(self, rel_path: str, name: str) -> Optional[Struct]:
        pkg_path = os.path.abspath(rel_path)
        for entry in sorted(os.listdir(pkg_path)):
            file_path = os.path.join(pkg_path, entry)
            if os.path.isdir(file_path):
                found = self._get_struct_info(file_path, name)
                if found is not None:
                    return found
                continue
            if not entry.endswith(".go"):
                continue
            with open(file_path, "rb") as handle:
                body = handle.read()
            if self.go_generated_prefix and body.startswith(self.go_generated_prefix):
                continue
            if self.file_parser is None:
                raise RuntimeError("no source file parser configured")
            try:
                src = self.file_parser(file_path)
            except Exception as exc:
                raise RuntimeError(f"{file_path},{name}: {exc}") from exc
            for struct in src.structures:
                if struct.name == name:
                    return struct
        return None

    def _get_mod_name(self) -> str:
        try:
            with open("go.mod", encoding="utf-8") as handle:
                line = handle.readline()
        except OSError:
            return ""
        if not line.endswith("\n"):
            return ""
        module = line.strip("\n")
        tokens = module.split(" ")
        if len(tokens) == 2:
            module = tokens[1].strip()
        return module

    def _trim_local_pkg(self, pkg: str) -> str:
        module = self._get_mod_name()
        if not module:
            return pkg
        module_tokens = module.split("/")
        pkg_tokens = pkg.split("/")
        if len(pkg_tokens) < len(module_tokens):
            return pkg
        rest = "/".join(pkg_tokens[len(module_tokens):])
        return posixpath.normpath(rest) if rest else ""