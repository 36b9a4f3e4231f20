"""Tag parsing, HTTP endpoint description and OpenAPI document building for annotated Go service interfaces."""

__version__ = "0.1.0"