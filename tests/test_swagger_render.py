import json

import yaml

from transportgen.api import GenerationInfo
from transportgen.swagger_render import SwaggerRender

DOCUMENT = {
    "openapi": "3.0.0",
    "info": {"title": "Users", "version": "v1"},
    "paths": {"/users/{id}": {"get": {"responses": {"200": {"description": ""}}}}},
}


def make_info(tmp_path, to_json=None, to_yaml=None):
    return GenerationInfo(
        swagger=DOCUMENT,
        swagger_to_json=to_json,
        swagger_to_yaml=to_yaml,
        swagger_abs_output_path=str(tmp_path / "docs" / "api"),
    )


def test_json_round_trip(tmp_path):
    SwaggerRender("swagger").generate(make_info(tmp_path, to_json=True))
    target = tmp_path / "docs" / "api" / "swagger.json"
    assert json.loads(target.read_text()) == DOCUMENT


def test_yaml_round_trip(tmp_path):
    SwaggerRender("swagger").generate(make_info(tmp_path, to_yaml=True))
    target = tmp_path / "docs" / "api" / "swagger.yaml"
    assert yaml.safe_load(target.read_text()) == DOCUMENT


def test_both_formats_write_yaml_with_double_extension(tmp_path):
    SwaggerRender("swagger").generate(make_info(tmp_path, to_json=True, to_yaml=True))
    target = tmp_path / "docs" / "api" / "swagger.json.yaml"
    assert yaml.safe_load(target.read_text()) == DOCUMENT
    assert not (tmp_path / "docs" / "api" / "swagger.json").exists()


def test_no_format_writes_empty_file(tmp_path):
    SwaggerRender("swagger").generate(make_info(tmp_path, to_json=False))
    target = tmp_path / "docs" / "api" / "swagger"
    assert target.read_bytes() == b""


def test_existing_file_is_replaced(tmp_path):
    out = tmp_path / "docs" / "api"
    out.mkdir(parents=True)
    (out / "swagger.json").write_text("x" * 10000)
    SwaggerRender("swagger").generate(make_info(tmp_path, to_json=True))
    assert json.loads((out / "swagger.json").read_text()) == DOCUMENT