"""Adapter and use-case wiring for the node control runtime.

This module owns construction of the long-lived adapters (config file, binary
locator, CLI, daemon launcher, shell session, storage) and of every use case
that the command surface exposes. It is invoked once by
:func:`commander.app.main.main` and handed to :func:`rest_api.app.create_app`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ..adapters.binary_locator import BinaryLocator
from ..adapters.cli_process import CliProcessAdapter
from ..adapters.config_file import ConfigFile
from ..adapters.daemon_process import DaemonLauncher
from ..adapters.net_tools import NetTools
from ..adapters.process_probe import ProcessProbe
from ..adapters.shell_session import ShellSession
from ..adapters.storage_local import StorageLocal
from ..usecases.address_book import LoadAddressBook, SaveAddressBook
from ..usecases.assets import (
    CheckOwnershipToken,
    GetAssetData,
    IssueAsset,
    IssueUniqueAsset,
    ListMyAssets,
    ListNetworkAssets,
    ReissueAsset,
    TransferAsset,
)
from ..usecases.config_ops import (
    CheckBinaries,
    ConfigExists,
    CreateDefaultConfig,
    GetDataFolderInfo,
    InitConfig,
    ReadConfig,
    ReadDebugLog,
    WriteConfig,
)
from ..usecases.diagnostics import CheckOpenPort, GetNetInfo, Ping
from ..usecases.node_lifecycle import (
    GetNetworkMode,
    RestartNode,
    SetNetworkMode,
    StartNode,
    StopNode,
)
from ..usecases.peers import BanOldPeers, ListBannedPeers, UnbanPeer
from ..usecases.poll_dashboard import PollDashboard
from ..usecases.raw_cli import GetInfo, ListAddressGroupings, RunCliArgs, RunCliCommand
from ..usecases.shell_commands import RunShellCommand, ShellAutocomplete
from ..usecases.wallet import (
    BackupWallet,
    BackupWalletTo,
    BroadcastAdvancedTransaction,
    GetChangeAddress,
    GetReceiveAddresses,
    ListUtxos,
    NewAddress,
    SendFunds,
)
from ..usecases.wallet_files import CreateNewWallet, RestoreWallet
from ..usecases.wallet_security import (
    ChangeWalletPassword,
    DumpPrivKey,
    EncryptWallet,
    ImportPrivKey,
    LockWallet,
    UnlockWallet,
)
from .settings import CommanderSettings

log = logging.getLogger(__name__)


class AppController:
    """Build the adapters once and expose one use case per operation.

    Call chain:
        ``commander.app.main`` creates one instance from
        :class:`CommanderSettings` and passes it to ``rest_api.create_app``.
        Route handlers call the ``uc_*`` attributes directly.
    """

    def __init__(self, settings: CommanderSettings, *, shell_dir: Optional[Path] = None) -> None:
        """Initialize adapters and use cases from ``settings``.

        Args:
            settings: Resolved runtime settings (data dir, binary names,
                shutdown timing).
            shell_dir: Initial shell directory; defaults to the daemon's
                directory when the daemon is found, else the process cwd.
        """
        self.settings = settings
        self.config = ConfigFile(settings.data_dir)
        self.locator = BinaryLocator(
            daemon_name=settings.daemon_name,
            cli_name=settings.cli_name,
            app_dir=settings.app_dir,
            source_dir=settings.source_root,
        )
        self.cli = CliProcessAdapter(self.config, self.locator)
        self.probe = ProcessProbe(settings.daemon_name)
        self.daemon = DaemonLauncher(
            self.config,
            self.locator,
            poll_attempts=settings.lock_poll_attempts,
            poll_interval_s=settings.lock_poll_interval_s,
            liveness=self.probe,
        )
        self.shell = ShellSession(shell_dir or self._default_shell_dir())
        self.storage = StorageLocal(str(settings.data_dir))
        self.net = NetTools()

        # Node and config
        self.uc_start_node = StartNode(self.daemon)
        self.uc_stop_node = StopNode(self.cli)
        self.uc_restart_node = RestartNode(self.cli, self.daemon)
        self.uc_get_network_mode = GetNetworkMode(self.config)
        self.uc_set_network_mode = SetNetworkMode(self.cli, self.config, grace_s=settings.shutdown_grace_s)
        self.uc_check_binaries = CheckBinaries(self.locator)
        self.uc_init_config = InitConfig(self.config, self.locator)
        self.uc_read_config = ReadConfig(self.config)
        self.uc_write_config = WriteConfig(self.config)
        self.uc_config_exists = ConfigExists(self.config)
        self.uc_create_default_config = CreateDefaultConfig(self.config)
        self.uc_data_folder_info = GetDataFolderInfo(self.storage)
        self.uc_read_debug_log = ReadDebugLog(self.storage)

        # Dashboard
        self.uc_dashboard = PollDashboard(self.cli, self.probe)

        # Wallet
        self.uc_receive_addresses = GetReceiveAddresses(self.cli)
        self.uc_new_address = NewAddress(self.cli)
        self.uc_change_address = GetChangeAddress(self.cli)
        self.uc_send = SendFunds(self.cli)
        self.uc_list_utxos = ListUtxos(self.cli)
        self.uc_broadcast_advanced = BroadcastAdvancedTransaction(self.cli)
        self.uc_backup_wallet = BackupWallet(self.cli, self.config)
        self.uc_backup_wallet_to = BackupWalletTo(self.cli)
        self.uc_restore_wallet = RestoreWallet(self.cli, self.daemon, self.storage)
        self.uc_create_new_wallet = CreateNewWallet(self.cli, self.daemon, self.storage)
        self.uc_encrypt_wallet = EncryptWallet(self.cli)
        self.uc_unlock_wallet = UnlockWallet(self.cli)
        self.uc_lock_wallet = LockWallet(self.cli)
        self.uc_change_password = ChangeWalletPassword(self.cli)
        self.uc_dump_priv_key = DumpPrivKey(self.cli)
        self.uc_import_priv_key = ImportPrivKey(self.cli)
        self.uc_load_address_book = LoadAddressBook(self.storage)
        self.uc_save_address_book = SaveAddressBook(self.storage)

        # Assets
        self.uc_list_assets = ListMyAssets(self.cli)
        self.uc_transfer_asset = TransferAsset(self.cli)
        self.uc_issue_asset = IssueAsset(self.cli)
        self.uc_issue_unique = IssueUniqueAsset(self.cli)
        self.uc_reissue_asset = ReissueAsset(self.cli)
        self.uc_asset_data = GetAssetData(self.cli)
        self.uc_list_network_assets = ListNetworkAssets(self.cli)
        self.uc_check_ownership = CheckOwnershipToken(self.cli)

        # Peers and diagnostics
        self.uc_ban_old_peers = BanOldPeers(self.cli)
        self.uc_banned_peers = ListBannedPeers(self.cli)
        self.uc_unban_peer = UnbanPeer(self.cli)
        self.uc_ping = Ping(self.net)
        self.uc_check_port = CheckOpenPort(self.net)
        self.uc_net_info = GetNetInfo(self.cli)

        # Console
        self.uc_cli_command = RunCliCommand(self.cli)
        self.uc_cli_args = RunCliArgs(self.cli)
        self.uc_get_info = GetInfo(self.cli)
        self.uc_address_groupings = ListAddressGroupings(self.cli)
        self.uc_shell_run = RunShellCommand(self.shell)
        self.uc_shell_autocomplete = ShellAutocomplete(self.shell)

        log.debug("AppController ready (data_dir=%s)", settings.data_dir)

    def _default_shell_dir(self) -> Path:
        daemon = Path(self.locator.daemon_path())
        if daemon.exists():
            return daemon.resolve().parent
        return Path.cwd()


__all__ = ["AppController"]
