"""Running goimports over generated files."""

from __future__ import annotations

import shutil
import subprocess


class GoImports:
    """Rewrites a Go file in place with the goimports tool."""

    def __init__(self, executable: str = "goimports"):
        self.executable = executable

    def go_imports(self, path: str) -> None:
        """Fix imports of ``path``; raises if the tool is missing or fails."""
        found = shutil.which(self.executable)
        if found is None:
            raise FileNotFoundError(f"executable file not found: {self.executable}")
        subprocess.run([found, "-w", path], check=True)