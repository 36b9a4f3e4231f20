"""Writing the collected OpenAPI document to disk."""

from __future__ import annotations

import json
import os

import yaml

from transportgen.api import GenerationInfo

JSON_EXT = ".json"
YAML_EXT = ".yaml"


class SwaggerRender:
    """Writes ``info.swagger`` as JSON and/or YAML under a fixed base name.

    When both formats are asked for, the file is named ``<name>.json.yaml``
    and holds YAML; when neither is, an empty file named ``<name>`` is written.
    """

    def __init__(self, file_name: str):
        self.file_name = file_name

    def generate(self, info: GenerationInfo) -> None:
        os.makedirs(info.swagger_abs_output_path, mode=0o750, exist_ok=True)
        file_name = os.path.join(info.swagger_abs_output_path, self.file_name)
        data = b""
        if info.swagger_to_json:
            file_name += JSON_EXT
            data = json.dumps(info.swagger, separators=(",", ":")).encode()
        if info.swagger_to_yaml:
            file_name += YAML_EXT
            data = yaml.safe_dump(info.swagger, sort_keys=False).encode()
        fd = os.open(file_name, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o750)
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)