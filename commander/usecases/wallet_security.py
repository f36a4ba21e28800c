from __future__ import annotations

from dataclasses import dataclass

from ..domain.errors import InvalidArgument
from ..domain.ports import CliPort


@dataclass
class EncryptWallet:
    cli: CliPort

    def __call__(self, password: str) -> str:
        return self.cli.run(["encryptwallet", password])


@dataclass
class UnlockWallet:
    cli: CliPort

    def __call__(self, password: str, duration: int) -> str:
        if duration < 0:
            raise InvalidArgument("Unlock duration must not be negative")
        return self.cli.run(["walletpassphrase", password, str(duration)])


@dataclass
class LockWallet:
    cli: CliPort

    def __call__(self) -> str:
        return self.cli.run(["walletlock"])


@dataclass
class ChangeWalletPassword:
    cli: CliPort

    def __call__(self, old_pass: str, new_pass: str) -> str:
        return self.cli.run(["walletpassphrasechange", old_pass, new_pass])


@dataclass
class DumpPrivKey:
    cli: CliPort

    def __call__(self, address: str) -> str:
        return self.cli.run(["dumpprivkey", address])


@dataclass
class ImportPrivKey:
    cli: CliPort

    def __call__(self, priv_key: str, label: str = "", rescan: bool = False) -> str:
        return self.cli.run(["importprivkey", priv_key, label, "true" if rescan else "false"])


__all__ = [
    "ChangeWalletPassword",
    "DumpPrivKey",
    "EncryptWallet",
    "ImportPrivKey",
    "LockWallet",
    "UnlockWallet",
]
