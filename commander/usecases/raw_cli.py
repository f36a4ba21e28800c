"""Raw CLI passthrough for the console view."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from ..domain.errors import InvalidArgument
from ..domain.payloads import parse_json
from ..domain.ports import CliPort
from ..domain.util import split_args


@dataclass
class RunCliCommand:
    """Run ``command`` with a free-form, quote-aware argument string."""

    cli: CliPort

    def __call__(self, command: str, args: str = "") -> str:
        name = (command or "").strip()
        if not name:
            raise InvalidArgument("Empty command")
        return self.cli.run([name, *split_args(args)])


@dataclass
class RunCliArgs:
    cli: CliPort

    def __call__(self, args: Sequence[str]) -> str:
        if not args:
            raise InvalidArgument("Empty command")
        return self.cli.run(list(args))


@dataclass
class GetInfo:
    cli: CliPort

    def __call__(self) -> str:
        return self.cli.run(["getinfo"])


@dataclass
class ListAddressGroupings:
    cli: CliPort

    def __call__(self) -> Any:
        return parse_json(self.cli.run(["listaddressgroupings"]), context="listaddressgroupings")


__all__ = ["GetInfo", "ListAddressGroupings", "RunCliArgs", "RunCliCommand"]
