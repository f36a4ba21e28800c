from __future__ import annotations

from dataclasses import dataclass

from ..domain.models import BinaryStatus, ConfigPaths, DataFolderInfo
from ..domain.ports import BinaryLocatorPort, ConfigPort, StoragePort

DEFAULT_LOG_LINES = 200


@dataclass
class InitConfig:
    """Make sure the config exists and report where everything lives."""

    config: ConfigPort
    locator: BinaryLocatorPort

    def __call__(self) -> ConfigPaths:
        cfg = self.config.ensure()
        return ConfigPaths(
            data_dir=str(self.config.data_dir),
            config_path=str(cfg),
            daemon_path=self.locator.daemon_path(),
            cli_path=self.locator.cli_path(),
        )


@dataclass
class CheckBinaries:
    locator: BinaryLocatorPort

    def __call__(self) -> BinaryStatus:
        return self.locator.status()


@dataclass
class ReadConfig:
    config: ConfigPort

    def __call__(self) -> str:
        self.config.ensure()
        return self.config.read_text()


@dataclass
class WriteConfig:
    config: ConfigPort

    def __call__(self, contents: str) -> None:
        self.config.ensure()
        self.config.write_text(contents)


@dataclass
class ConfigExists:
    config: ConfigPort

    def __call__(self) -> bool:
        return self.config.exists()


@dataclass
class CreateDefaultConfig:
    config: ConfigPort

    def __call__(self) -> str:
        return str(self.config.create_default())


@dataclass
class GetDataFolderInfo:
    storage: StoragePort

    def __call__(self) -> DataFolderInfo:
        return self.storage.data_folder_info()


@dataclass
class ReadDebugLog:
    storage: StoragePort

    def __call__(self, max_lines: int = DEFAULT_LOG_LINES) -> str:
        return self.storage.read_log_tail(max_lines)


__all__ = [
    "CheckBinaries",
    "ConfigExists",
    "CreateDefaultConfig",
    "DEFAULT_LOG_LINES",
    "GetDataFolderInfo",
    "InitConfig",
    "ReadConfig",
    "ReadDebugLog",
    "WriteConfig",
]
