from __future__ import annotations

from dataclasses import dataclass
from typing import List

from ..domain.ports import ShellPort


@dataclass
class RunShellCommand:
    shell: ShellPort

    def __call__(self, command: str) -> str:
        return self.shell.run(command)


@dataclass
class ShellAutocomplete:
    shell: ShellPort

    def __call__(self, line: str) -> List[str]:
        return self.shell.autocomplete(line)


__all__ = ["RunShellCommand", "ShellAutocomplete"]
