"""Data model shared by the tag parsers, processors and renderers.

The type classes describe Go declarations found in service sources; the
remaining dataclasses carry what the annotations say about each interface
and method through the generation pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

_BUILTIN_TYPE_NAMES = frozenset(
    {
        "bool",
        "byte",
        "complex64",
        "complex128",
        "error",
        "float32",
        "float64",
        "int",
        "int8",
        "int16",
        "int32",
        "int64",
        "rune",
        "string",
        "uint",
        "uint8",
        "uint16",
        "uint32",
        "uint64",
        "uintptr",
    }
)


class TagError(ValueError):
    """An annotation tag is present but malformed."""


@dataclass(frozen=True)
class TName:
    """A plain named type such as ``int`` or ``User``."""

    type_name: str

    def __str__(self) -> str:
        return self.type_name


@dataclass(frozen=True)
class TPointer:
    """A pointer to another type."""

    next: Any

    def __str__(self) -> str:
        return f"*{self.next}"


@dataclass(frozen=True)
class TArray:
    """A slice (``length`` is None) or a fixed-size array."""

    next: Any
    length: Optional[int] = None

    @property
    def is_slice(self) -> bool:
        return self.length is None

    def __str__(self) -> str:
        size = "" if self.length is None else str(self.length)
        return f"[{size}]{self.next}"


@dataclass(frozen=True)
class TImport:
    """A type qualified by an imported package."""

    package: str
    next: Any
    alias: Optional[str] = None

    @property
    def name(self) -> str:
        """The identifier the package is referred to by."""
        return self.alias or self.package.rsplit("/", 1)[-1]

    def __str__(self) -> str:
        return f"{self.name}.{self.next}"


@dataclass(frozen=True)
class TMap:
    """A map type."""

    key: Any
    value: Any

    def __str__(self) -> str:
        return f"map[{self.key}]{self.value}"


@dataclass(frozen=True)
class TEllipsis:
    """A variadic parameter type."""

    next: Any

    def __str__(self) -> str:
        return f"...{self.next}"


@dataclass(frozen=True)
class TInterface:
    """An inline interface type; empty when it declares no methods."""

    methods: tuple = ()

    def __str__(self) -> str:
        return "interface{}"


@dataclass
class Variable:
    """A named, typed parameter or result."""

    name: str
    type: Any

    def __str__(self) -> str:
        return f"{self.name} {self.type}"


@dataclass
class StructField:
    """A struct field with its parsed struct tags."""

    name: str
    type: Any
    tags: dict[str, list[str]] = field(default_factory=dict)

    @property
    def variable(self) -> Variable:
        return Variable(self.name, self.type)


@dataclass
class Struct:
    """A struct declaration; also usable where a type is expected."""

    name: str
    fields: list[StructField] = field(default_factory=list)
    docs: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        return self.name


@dataclass
class Function:
    """A method of an interface with its doc comment lines."""

    name: str
    args: list[Variable] = field(default_factory=list)
    results: list[Variable] = field(default_factory=list)
    docs: list[str] = field(default_factory=list)


@dataclass
class GoInterface:
    """An interface declaration."""

    name: str
    methods: list[Function] = field(default_factory=list)
    docs: list[str] = field(default_factory=list)


@dataclass
class GoFile:
    """The declarations of one source file."""

    name: str = ""
    interfaces: list[GoInterface] = field(default_factory=list)
    structures: list[Struct] = field(default_factory=list)


@dataclass
class Placeholder:
    """A method argument bound to a query or body value."""

    name: str = ""
    type: str = ""
    is_pointer: bool = False
    is_string: bool = False
    is_int: bool = False


@dataclass
class MetricsPlaceholder:
    """A method argument used as an additional metrics label."""

    name: str = ""
    is_pointer: bool = False
    is_string: bool = False
    is_int: bool = False


@dataclass
class SwaggerInfo:
    """Descriptive OpenAPI fields; servers are dicts with url and description."""

    description: Optional[str] = None
    summary: Optional[str] = None
    title: Optional[str] = None
    version: Optional[str] = None
    servers: list[dict[str, str]] = field(default_factory=list)


@dataclass
class HTTPMethod:
    """Everything the annotations say about one HTTP endpoint."""

    method: str = ""
    api_path: str = ""
    raw_uri_path: str = ""
    uri_path: str = ""
    client_uri_path: str = ""
    error_processor: str = ""
    uri_path_placeholders: list[str] = field(default_factory=list)
    query_placeholders: dict[str, Placeholder] = field(default_factory=dict)
    is_int_query_placeholders: bool = False
    header_placeholders: dict[str, str] = field(default_factory=dict)
    cookie_placeholders: dict[str, str] = field(default_factory=dict)
    content_type: str = ""
    json_tags: dict[str, str] = field(default_factory=dict)
    plain_object: str = ""
    multipart_value_tags: dict[str, str] = field(default_factory=dict)
    multipart_file_tags: dict[str, str] = field(default_factory=dict)
    form_urlencoded_tags: dict[str, str] = field(default_factory=dict)
    body: dict[str, str] = field(default_factory=dict)
    body_placeholders: dict[str, Placeholder] = field(default_factory=dict)
    is_int_body_placeholders: bool = False
    response_headers: dict[str, str] = field(default_factory=dict)
    response_status: str = ""
    response_content_type: str = ""
    response_content_encoding: str = ""
    response_json_tags: dict[str, str] = field(default_factory=dict)
    response_body: dict[str, str] = field(default_factory=dict)
    response_file: str = ""
    response_file_name: str = ""
    response_body_field: str = ""
    log_ignores: list[str] = field(default_factory=list)
    additional_metrics_labels: dict[str, MetricsPlaceholder] = field(default_factory=dict)
    swagger_info: SwaggerInfo = field(default_factory=SwaggerInfo)


@dataclass
class Interface:
    """An annotated service interface and where its code goes."""

    iface: GoInterface
    pkg_name: str = ""
    abs_output_path: str = ""
    rel_output_path: str = ""
    is_tls_client: bool = False
    is_insecure_tls: bool = False
    http_methods: dict[str, HTTPMethod] = field(default_factory=dict)
    swagger_info: SwaggerInfo = field(default_factory=SwaggerInfo)


@dataclass
class GenerationInfo:
    """State collected over a whole generation run."""

    interfaces: list[Interface] = field(default_factory=list)
    swagger_info: SwaggerInfo = field(default_factory=SwaggerInfo)
    swagger: Optional[dict[str, Any]] = None
    swagger_to_json: Optional[bool] = None
    swagger_to_yaml: Optional[bool] = None
    swagger_abs_output_path: str = ""


def is_builtin(tp: Any) -> bool:
    """Tell whether a type is made only of predeclared types."""
    if isinstance(tp, TName):
        return tp.type_name in _BUILTIN_TYPE_NAMES
    if isinstance(tp, TMap):
        return is_builtin(tp.key) and is_builtin(tp.value)
    if isinstance(tp, TInterface):
        return not tp.methods
    if isinstance(tp, (TPointer, TArray, TEllipsis)):
        return is_builtin(tp.next)
    return False