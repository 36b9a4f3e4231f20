"""Walking a service source tree and feeding its files to the processors."""

from __future__ import annotations

import os
import posixpath
from typing import Callable

from transportgen.api import GenerationInfo, GoFile

OPENAPI_VERSION = "3.0.0"


class Preprocessor:
    """Parses every hand-written Go file below a directory and processes it.

    Files holding ``go_generated_prefix`` are skipped, so generated code is
    never read back. ``file_parser`` turns a file path into a ``GoFile``.
    Once a directory is done, a collected OpenAPI document is written with
    ``swagger_render``.
    """

    def __init__(
        self,
        services_processor,
        go_generated_prefix: bytes,
        swagger_render,
        file_parser: Callable[[str], GoFile],
    ):
        self.services_processor = services_processor
        self.go_generated_prefix = go_generated_prefix
        self.swagger_render = swagger_render
        self.file_parser = file_parser

    def process(self, service_directory: str, out_path: str, info: GenerationInfo) -> None:
        """Process ``service_directory`` recursively, generating into ``out_path``."""
        for name in sorted(os.listdir(service_directory)):
            file_path = os.path.join(service_directory, name)
            if os.path.isdir(file_path):
                try:
                    self.process(file_path, posixpath.join(out_path, name), info)
                except Exception as exc:
                    raise RuntimeError(f"processing {file_path} failed: {exc}") from exc
                continue
            if not name.endswith(".go"):
                continue
            with open(file_path, "rb") as handle:
                body = handle.read()
            if self.go_generated_prefix in body:
                continue
            source = self.file_parser(file_path)
            try:
                self.services_processor.process(info, source, out_path)
            except Exception as exc:
                raise RuntimeError(f"services processing of {file_path} failed: {exc}") from exc

        if info.swagger is not None:
            info.swagger["openapi"] = OPENAPI_VERSION
            self.swagger_render.generate(info)