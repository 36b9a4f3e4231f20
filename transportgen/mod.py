"""Resolution of Go package import paths to directories on disk."""

from __future__ import annotations

import os
import posixpath
import subprocess
from pathlib import Path
from typing import Optional


def _strip_comment(line: str) -> str:
    index = line.find("//")
    return line if index < 0 else line[:index]


def _unquote(token: str) -> str:
    if len(token) >= 2 and token[0] == token[-1] and token[0] in "\"`":
        return token[1:-1]
    return token


def parse_go_mod(text: str, go_path: str) -> tuple[str, dict[str, str]]:
    """Read the module path and required modules from go.mod text.

    Each required module maps to its directory in the module cache under
    ``go_path``. Raises ValueError when there is no module directive.
    """
    module = ""
    require: dict[str, str] = {}
    block: Optional[str] = None

    def add_requirement(tokens: list[str]) -> None:
        if len(tokens) >= 2:
            path, version = _unquote(tokens[0]), _unquote(tokens[1])
            require[path] = f"{go_path}/pkg/mod/{path}@{version}"

    for raw in text.splitlines():
        tokens = _strip_comment(raw).split()
        if not tokens:
            continue
        if block is not None:
            if tokens[0] == ")":
                block = None
            elif block == "require":
                add_requirement(tokens)
            continue
        verb, args = tokens[0], tokens[1:]
        if args == ["("]:
            block = verb
        elif verb == "module" and args:
            module = _unquote(args[0])
        elif verb == "require":
            add_requirement(args)
    if not module:
        raise ValueError("go.mod has no module directive")
    return module, require


class GoMod:
    """Maps import paths to local or module-cache directories."""

    def __init__(
        self,
        root: str = ".",
        go_mod_path: Optional[str] = None,
        go_path: Optional[str] = None,
    ):
        self.root = root
        self.go_mod_path = go_mod_path
        self.go_path = go_path if go_path is not None else os.environ.get("GOPATH", "")

    def pkg_mod_path(self, pkg_name: str) -> str:
        """Directory holding ``pkg_name``, or an empty string if unknown."""
        module, require = self._read_mod()
        if pkg_name.startswith(module):
            return "." + pkg_name[len(module):]
        tokens = pkg_name.split("/")
        for cut in range(len(tokens)):
            prefix = "/".join(tokens[: len(tokens) - cut])
            if prefix in require:
                rest = "/".join(tokens[len(tokens) - cut:])
                return posixpath.normpath(posixpath.join(require[prefix], rest))
        return ""

    def _read_mod(self) -> tuple[str, dict[str, str]]:
        mod_path = self.go_mod_path if self.go_mod_path is not None else self._locate_go_mod()
        try:
            text = Path(mod_path).read_text()
            return parse_go_mod(text, self.go_path)
        except (OSError, ValueError):
            return "", {}

    def _locate_go_mod(self) -> str:
        """Ask the go tool for go.mod, climbing up while it cannot start."""
        root = self.root
        while True:
            try:
                completed = subprocess.run(
                    ["go", "env", "GOMOD"],
                    cwd=root,
                    capture_output=True,
                    check=True,
                )
            except subprocess.CalledProcessError:
                return ""
            except OSError:
                parent = os.path.join(root, "..")
                if os.path.abspath(parent) == os.path.abspath(root):
                    return ""
                root = parent
                continue
            return completed.stdout.decode().strip()