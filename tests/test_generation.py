import pytest

from transportgen.api import GenerationInfo, GoInterface, Interface
from transportgen.generation import (
    ErrorsProcessor,
    HTTPClientProcessor,
    HTTPServerProcessor,
    InstrumentingProcessor,
    LoggingProcessor,
    MockProcessor,
)


class RecordingRender:
    def __init__(self, name, log, fail=False):
        self.name = name
        self.log = log
        self.fail = fail
        self.received = []

    def generate(self, iface):
        self.log.append(self.name)
        self.received.append(iface)
        iface.pkg_name = "changed"
        if self.fail:
            raise OSError("disk full")


def _iface():
    return Interface(iface=GoInterface("Service"), abs_output_path="/out/service")


def test_http_client_order_and_flags():
    log = []
    client, transport, builder = (RecordingRender(n, log) for n in ("client", "transport", "builder"))
    iface = _iface()
    HTTPClientProcessor(True, True, client, transport, builder).process(GenerationInfo(), iface)
    assert log == ["builder", "client", "transport"]
    assert iface.is_tls_client and iface.is_insecure_tls
    assert client.received[0].is_tls_client is True


def test_renders_get_a_copy():
    log = []
    render = RecordingRender("mock", log)
    iface = _iface()
    MockProcessor(render).process(GenerationInfo(), iface)
    assert iface.pkg_name == ""
    assert render.received[0].abs_output_path == iface.abs_output_path


def test_http_server_order():
    log = []
    server, transport, builder = (RecordingRender(n, log) for n in ("server", "transport", "builder"))
    iface = _iface()
    HTTPServerProcessor(server, transport, builder).process(GenerationInfo(), iface)
    assert log == ["builder", "server", "transport"]
    passed = [render.received[0] for render in (builder, server, transport)]
    assert [p.abs_output_path for p in passed] == ["/out/service"] * 3
    assert [p.iface.name for p in passed] == ["Service"] * 3
    assert iface.pkg_name == ""


def test_http_server_stops_on_failure():
    log = []
    server = RecordingRender("server", log, fail=True)
    transport = RecordingRender("transport", log)
    builder = RecordingRender("builder", log)
    with pytest.raises(RuntimeError) as excinfo:
        HTTPServerProcessor(server, transport, builder).process(GenerationInfo(), _iface())
    assert isinstance(excinfo.value.__cause__, OSError)
    assert log == ["builder", "server"]


def test_errors_processor_runs_ui_then_client():
    log = []
    ui, client = RecordingRender("ui", log), RecordingRender("client", log)
    iface = _iface()
    ErrorsProcessor("@gtg", ui, client).process(GenerationInfo(), iface)
    assert log == ["ui", "client"]
    assert ui.received[0].abs_output_path == "/out/service"
    assert client.received[0].iface.name == "Service"
    assert iface.pkg_name == ""


def test_errors_processor_failure_skips_client():
    log = []
    ui, client = RecordingRender("ui", log, fail=True), RecordingRender("client", log)
    with pytest.raises(RuntimeError):
        ErrorsProcessor("@gtg", ui, client).process(GenerationInfo(), _iface())
    assert log == ["ui"]


@pytest.mark.parametrize("processor_cls", [InstrumentingProcessor, LoggingProcessor, MockProcessor])
def test_single_render_processors(processor_cls):
    log = []
    processor_cls(RecordingRender("one", log)).process(GenerationInfo(), _iface())
    assert log == ["one"]


@pytest.mark.parametrize("processor_cls", [InstrumentingProcessor, LoggingProcessor, MockProcessor])
def test_single_render_processors_wrap_errors(processor_cls):
    with pytest.raises(RuntimeError) as excinfo:
        processor_cls(RecordingRender("one", [], fail=True)).process(GenerationInfo(), _iface())
    assert isinstance(excinfo.value.__cause__, OSError)