from __future__ import annotations

from dataclasses import dataclass

from ..domain.errors import InvalidArgument
from ..domain.models import NetworkInfo
from ..domain.payloads import NetworkInfoPayload, parse_model
from ..domain.ports import CliPort, NetToolsPort


@dataclass
class Ping:
    net: NetToolsPort

    def __call__(self, host: str) -> str:
        return self.net.ping(host)


@dataclass
class CheckOpenPort:
    net: NetToolsPort

    def __call__(self, host: str, port: int) -> bool:
        if not 0 < port < 65536:
            raise InvalidArgument("Port must be between 1 and 65535")
        return self.net.check_port(host, port)


@dataclass
class GetNetInfo:
    cli: CliPort

    def __call__(self) -> NetworkInfo:
        info = parse_model(self.cli.run(["getnetworkinfo"]), NetworkInfoPayload, context="getnetworkinfo")
        addresses = tuple(item.address for item in info.localaddresses if item.address)
        return NetworkInfo(
            version=info.version,
            subversion=info.subversion,
            protocolversion=info.protocolversion,
            connections=info.connections,
            localaddresses=addresses,
            full_ip=addresses[0] if addresses else "",
        )


__all__ = ["CheckOpenPort", "GetNetInfo", "Ping"]
