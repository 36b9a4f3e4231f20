"""Processors that hand an annotated interface to its code renderers."""

from __future__ import annotations

import dataclasses

from transportgen.api import GenerationInfo, Interface


def _render(render, iface: Interface, label: str) -> None:
    """Run a renderer on a shallow copy of the interface, wrapping failures."""
    try:
        render.generate(dataclasses.replace(iface))
    except Exception as exc:
        raise RuntimeError(f"{label} generation failed: {exc}") from exc


class ErrorsProcessor:
    """Generates the UI and client error processors."""

    def __init__(self, tag_mark: str, ui_errors_render, client_errors_render):
        self.tag_mark = tag_mark
        self.ui_errors_render = ui_errors_render
        self.client_errors_render = client_errors_render

    def process(self, info: GenerationInfo, iface: Interface) -> None:
        _render(self.ui_errors_render, iface, "[errors] ui errors")
        _render(self.client_errors_render, iface, "[errors] client errors")


class HTTPClientProcessor:
    """Generates the HTTP client builder, client and transport."""

    def __init__(self, is_tls: bool, is_insecure_tls: bool, client_render, transport_render, builder_render):
        self.is_tls = is_tls
        self.is_insecure_tls = is_insecure_tls
        self.client_render = client_render
        self.transport_render = transport_render
        self.builder_render = builder_render

    def process(self, info: GenerationInfo, iface: Interface) -> None:
        iface.is_tls_client = self.is_tls
        iface.is_insecure_tls = self.is_insecure_tls
        _render(self.builder_render, iface, "[http client] builder")
        _render(self.client_render, iface, "[http client] client")
        _render(self.transport_render, iface, "[http client] transport")


class HTTPServerProcessor:
    """Generates the HTTP server builder, handlers and transport."""

    def __init__(self, server_render, transport_render, builder_render):
        self.server_render = server_render
        self.transport_render = transport_render
        self.builder_render = builder_render

    def process(self, info: GenerationInfo, iface: Interface) -> None:
        _render(self.builder_render, iface, "[http server] builder")
        _render(self.server_render, iface, "[http server] server")
        _render(self.transport_render, iface, "[http server] transport")


class InstrumentingProcessor:
    """Generates the metrics middleware."""

    def __init__(self, instrumenting_render):
        self.instrumenting_render = instrumenting_render

    def process(self, info: GenerationInfo, iface: Interface) -> None:
        _render(self.instrumenting_render, iface, "[instrumenting]")


class LoggingProcessor:
    """Generates the logging middleware."""

    def __init__(self, logging_render):
        self.logging_render = logging_render

    def process(self, info: GenerationInfo, iface: Interface) -> None:
        _render(self.logging_render, iface, "[logging]")


class MockProcessor:
    """Generates the service mock."""

    def __init__(self, mock_render):
        self.mock_render = mock_render

    def process(self, info: GenerationInfo, iface: Interface) -> None:
        _render(self.mock_render, iface, "[mock]")