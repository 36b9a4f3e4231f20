import pytest

from transportgen.api import GenerationInfo, GoFile
from transportgen.preprocessor import Preprocessor

PREFIX = b"// CODE GENERATED AUTOMATICALLY"


class RecordingServices:
    def __init__(self, fail=False):
        self.calls = []
        self.fail = fail

    def process(self, info, file, out_path):
        if self.fail:
            raise ValueError("boom")
        self.calls.append((file.name, out_path))


class RecordingRender:
    def __init__(self):
        self.documents = []

    def generate(self, info):
        self.documents.append(dict(info.swagger))


def parse(path):
    return GoFile(name=path.rsplit("/", 1)[-1])


def make(services, render=None):
    return Preprocessor(services, PREFIX, render or RecordingRender(), parse)


def test_processes_go_files_in_name_order(tmp_path):
    (tmp_path / "b.go").write_text("package svc\n")
    (tmp_path / "a.go").write_text("package svc\n")
    (tmp_path / "notes.txt").write_text("ignored\n")
    services = RecordingServices()
    make(services).process(str(tmp_path), "out", GenerationInfo())
    assert services.calls == [("a.go", "out"), ("b.go", "out")]


def test_skips_generated_files(tmp_path):
    (tmp_path / "gen.go").write_bytes(b"// Package x\n" + PREFIX + b"\npackage x\n")
    (tmp_path / "svc.go").write_text("package x\n")
    services = RecordingServices()
    make(services).process(str(tmp_path), "out", GenerationInfo())
    assert services.calls == [("svc.go", "out")]


def test_subdirectories_extend_out_path(tmp_path):
    sub = tmp_path / "users"
    sub.mkdir()
    (sub / "svc.go").write_text("package users\n")
    services = RecordingServices()
    make(services).process(str(tmp_path), "pkg", GenerationInfo())
    assert services.calls == [("svc.go", "pkg/users")]


def test_swagger_is_versioned_and_rendered(tmp_path):
    (tmp_path / "svc.go").write_text("package svc\n")
    render = RecordingRender()
    info = GenerationInfo(swagger={"info": {}})
    make(RecordingServices(), render).process(str(tmp_path), "out", info)
    assert info.swagger["openapi"] == "3.0.0"
    assert render.documents == [{"info": {}, "openapi": "3.0.0"}]


def test_no_swagger_means_no_render(tmp_path):
    render = RecordingRender()
    make(RecordingServices(), render).process(str(tmp_path), "out", GenerationInfo())
    assert render.documents == []


def test_processor_failure_is_wrapped(tmp_path):
    (tmp_path / "svc.go").write_text("package svc\n")
    with pytest.raises(RuntimeError, match="boom"):
        make(RecordingServices(fail=True)).process(str(tmp_path), "out", GenerationInfo())


def test_missing_directory_raises(tmp_path):
    with pytest.raises(OSError):
        make(RecordingServices()).process(str(tmp_path / "absent"), "out", GenerationInfo())