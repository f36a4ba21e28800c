# rest_api/app.py
"""HTTP command surface for the node control layer.

Every route delegates to one use case on the injected ``AppController``.
Failures leave here as ``HTTPException`` whose detail is
``{"code": ..., "message": ...}``; this is the only place errors become text.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from fastapi import FastAPI, Header, HTTPException, Query
from pydantic import BaseModel, Field

from commander.app.controller import AppController
from commander.domain.models import AddressBookEntry, AdvancedTransaction, RawTxInput
from commander.usecases.config_ops import DEFAULT_LOG_LINES
from commander.usecases.error_mapping import error_payload, http_status_for, map_error

log = logging.getLogger(__name__)


# ---------- Request models ----------
class NetworkModeRequest(BaseModel):
    mode: str


class ConfigContents(BaseModel):
    contents: str


class NewAddressRequest(BaseModel):
    label: Optional[str] = None


class SendRequest(BaseModel):
    to: str
    amount: str


class TxInput(BaseModel):
    txid: str
    vout: int = Field(..., ge=0)


class AdvancedTxRequest(BaseModel):
    inputs: List[TxInput]
    outputs: Dict[str, str]


class PasswordRequest(BaseModel):
    password: str


class UnlockRequest(BaseModel):
    password: str
    duration: int = Field(60, ge=0)


class ChangePasswordRequest(BaseModel):
    old_pass: str
    new_pass: str


class AddressRequest(BaseModel):
    address: str


class ImportKeyRequest(BaseModel):
    priv_key: str
    label: str = ""
    rescan: bool = False


class BackupRequest(BaseModel):
    path: Optional[str] = None


class RestoreRequest(BaseModel):
    path: str
    backup_existing: bool = True
    restart_node: bool = True


class NewWalletRequest(BaseModel):
    backup_existing: bool = True
    restart_node: bool = True


class AddressBookItem(BaseModel):
    label: str = ""
    address: str
    locked: bool = False
    date: int = 0


class TransferRequest(BaseModel):
    asset: str
    amount: str
    to: str


class IssueRequest(BaseModel):
    name: str
    qty: str
    units: int = 0
    reissuable: bool = True
    ipfs: str = ""


class IssueUniqueRequest(BaseModel):
    root_name: str
    tags: List[str]
    ipfs_hashes: List[str] = Field(default_factory=list)


class ReissueRequest(BaseModel):
    name: str
    qty: str
    to_address: str = ""
    change_verifier: bool = False
    new_verifier: str = ""
    new_ipfs: str = ""


class PingRequest(BaseModel):
    host: str


class PortCheckRequest(BaseModel):
    host: str
    port: int


class CliCommandRequest(BaseModel):
    command: str
    args: str = ""


class CliArgsRequest(BaseModel):
    args: List[str]


class ShellRequest(BaseModel):
    command: str


class AutocompleteRequest(BaseModel):
    line: str = ""


def _text(value: str) -> Dict[str, str]:
    return {"result": value}


def create_app(controller: AppController, *, api_key: Optional[str] = None) -> FastAPI:
    """Build the FastAPI application around an already wired controller."""
    app = FastAPI(title="Hemp0x Commander API", version="0.1.0")
    app.state.controller = controller
    expected_key = controller.settings.api_key if api_key is None else api_key

    # ---------- Helpers ----------
    def require_key(x_api_key: Optional[str]) -> None:
        if expected_key and x_api_key != expected_key:
            raise HTTPException(401, "Unauthorized")

    def call(fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        try:
            return fn(*args, **kwargs)
        except Exception as exc:
            err = map_error(exc, default_code="INTERNAL_ERROR")
            status = http_status_for(err)
            if status >= 500 and err is not exc:
                log.exception("Unhandled failure in %s", type(fn).__name__)
            raise HTTPException(status, error_payload(err)) from exc

    c = controller

    # ---------- Health / dashboard ----------
    @app.get("/health")
    def health(x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return {"ok": True, "data_dir": str(c.settings.data_dir)}

    @app.get("/dashboard")
    def dashboard(x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return call(c.uc_dashboard)

    # ---------- Node ----------
    @app.post("/node/start", status_code=202)
    def start_node(x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        call(c.uc_start_node)
        return {"ok": True}

    @app.post("/node/stop")
    def stop_node(x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        call(c.uc_stop_node)
        return {"ok": True}

    @app.post("/node/restart", status_code=202)
    def restart_node(x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        call(c.uc_restart_node)
        return {"ok": True}

    @app.get("/node/network-mode")
    def get_network_mode(x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return {"mode": call(c.uc_get_network_mode).value}

    @app.put("/node/network-mode")
    def set_network_mode(req: NetworkModeRequest, x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return _text(call(c.uc_set_network_mode, req.mode))

    @app.get("/node/binaries")
    def binary_status(x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return call(c.uc_check_binaries)

    # ---------- Config / data folder ----------
    @app.post("/config/init")
    def init_config(x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return call(c.uc_init_config)

    @app.get("/config")
    def read_config(x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return {"contents": call(c.uc_read_config)}

    @app.put("/config")
    def write_config(req: ConfigContents, x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        call(c.uc_write_config, req.contents)
        return {"ok": True}

    @app.get("/config/exists")
    def config_exists(x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return {"exists": call(c.uc_config_exists)}

    @app.post("/config/default", status_code=201)
    def create_default_config(x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return {"config_path": call(c.uc_create_default_config)}

    @app.get("/data-folder")
    def data_folder_info(x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return call(c.uc_data_folder_info)

    @app.get("/logs/debug")
    def debug_log(
        lines: int = Query(DEFAULT_LOG_LINES, ge=1, le=100000),
        x_api_key: Optional[str] = Header(None),
    ):
        require_key(x_api_key)
        return _text(call(c.uc_read_debug_log, lines))

    # ---------- Wallet ----------
    @app.get("/wallet/addresses")
    def receive_addresses(show_change: bool = False, x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return call(c.uc_receive_addresses, show_change)

    @app.post("/wallet/addresses")
    def new_address(req: NewAddressRequest, x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return {"address": call(c.uc_new_address, req.label)}

    @app.get("/wallet/change-address")
    def change_address(x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return {"address": call(c.uc_change_address)}

    @app.post("/wallet/send")
    def send(req: SendRequest, x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return {"txid": call(c.uc_send, req.to, req.amount)}

    @app.get("/wallet/utxos")
    def list_utxos(x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return call(c.uc_list_utxos)

    @app.post("/wallet/transactions/advanced")
    def broadcast_advanced(req: AdvancedTxRequest, x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        tx = AdvancedTransaction(
            inputs=tuple(RawTxInput(txid=item.txid, vout=item.vout) for item in req.inputs),
            outputs=dict(req.outputs),
        )
        return {"txid": call(c.uc_broadcast_advanced, tx)}

    @app.post("/wallet/encrypt")
    def encrypt_wallet(req: PasswordRequest, x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return _text(call(c.uc_encrypt_wallet, req.password))

    @app.post("/wallet/unlock")
    def unlock_wallet(req: UnlockRequest, x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return _text(call(c.uc_unlock_wallet, req.password, req.duration))

    @app.post("/wallet/lock")
    def lock_wallet(x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return _text(call(c.uc_lock_wallet))

    @app.post("/wallet/passphrase")
    def change_password(req: ChangePasswordRequest, x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return _text(call(c.uc_change_password, req.old_pass, req.new_pass))

    @app.post("/wallet/privkey/dump")
    def dump_priv_key(req: AddressRequest, x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return {"priv_key": call(c.uc_dump_priv_key, req.address)}

    @app.post("/wallet/privkey/import")
    def import_priv_key(req: ImportKeyRequest, x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return _text(call(c.uc_import_priv_key, req.priv_key, req.label, req.rescan))

    @app.post("/wallet/backup")
    def backup_wallet(req: BackupRequest, x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        if req.path:
            call(c.uc_backup_wallet_to, req.path)
            return {"path": req.path}
        return {"path": call(c.uc_backup_wallet)}

    @app.post("/wallet/restore")
    def restore_wallet(req: RestoreRequest, x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        backup = call(
            c.uc_restore_wallet,
            req.path,
            backup_existing=req.backup_existing,
            restart_node=req.restart_node,
        )
        return {"ok": True, "backup_path": backup}

    @app.post("/wallet/new")
    def create_new_wallet(req: NewWalletRequest, x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        backup = call(
            c.uc_create_new_wallet,
            backup_existing=req.backup_existing,
            restart_node=req.restart_node,
        )
        return {"ok": True, "backup_path": backup}

    @app.get("/address-book")
    def load_address_book(x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return call(c.uc_load_address_book)

    @app.put("/address-book")
    def save_address_book(entries: List[AddressBookItem], x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        book = [AddressBookEntry.from_dict(item.model_dump()) for item in entries]
        call(c.uc_save_address_book, book)
        return {"ok": True, "count": len(book)}

    # ---------- Assets ----------
    @app.get("/assets")
    def list_assets(x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return call(c.uc_list_assets)

    @app.get("/assets/network")
    def list_network_assets(
        pattern: str = "*",
        verbose: bool = False,
        x_api_key: Optional[str] = Header(None),
    ):
        require_key(x_api_key)
        return _text(call(c.uc_list_network_assets, pattern, verbose))

    @app.post("/assets/transfer")
    def transfer_asset(req: TransferRequest, x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return {"txid": call(c.uc_transfer_asset, req.asset, req.amount, req.to)}

    @app.post("/assets/issue")
    def issue_asset(req: IssueRequest, x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return {"txid": call(c.uc_issue_asset, req.name, req.qty, req.units, req.reissuable, req.ipfs)}

    @app.post("/assets/issue-unique")
    def issue_unique(req: IssueUniqueRequest, x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return {"txid": call(c.uc_issue_unique, req.root_name, req.tags, req.ipfs_hashes)}

    @app.post("/assets/reissue")
    def reissue_asset(req: ReissueRequest, x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        txid = call(
            c.uc_reissue_asset,
            req.name,
            req.qty,
            req.to_address,
            req.change_verifier,
            req.new_verifier,
            req.new_ipfs,
        )
        return {"txid": txid}

    @app.get("/assets/{name}/ownership")
    def check_ownership(name: str, x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return {"owned": call(c.uc_check_ownership, name)}

    @app.get("/assets/{name}")
    def asset_data(name: str, x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return call(c.uc_asset_data, name)

    # ---------- Peers / diagnostics ----------
    @app.post("/peers/ban-old")
    def ban_old_peers(x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return call(c.uc_ban_old_peers)

    @app.get("/peers/banned")
    def banned_peers(x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return call(c.uc_banned_peers)

    @app.delete("/peers/banned/{address:path}")
    def unban_peer(address: str, x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return _text(call(c.uc_unban_peer, address))

    @app.post("/diagnostics/ping")
    def ping(req: PingRequest, x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return _text(call(c.uc_ping, req.host))

    @app.post("/diagnostics/port")
    def check_port(req: PortCheckRequest, x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return {"open": call(c.uc_check_port, req.host, req.port)}

    @app.get("/network/info")
    def net_info(x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return call(c.uc_net_info)

    # ---------- Console ----------
    @app.post("/cli")
    def cli_command(req: CliCommandRequest, x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return _text(call(c.uc_cli_command, req.command, req.args))

    @app.post("/cli/args")
    def cli_args(req: CliArgsRequest, x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return _text(call(c.uc_cli_args, req.args))

    @app.get("/cli/getinfo")
    def get_info(x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return _text(call(c.uc_get_info))

    @app.get("/cli/address-groupings")
    def address_groupings(x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return call(c.uc_address_groupings)

    @app.post("/shell/run")
    def shell_run(req: ShellRequest, x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return _text(call(c.uc_shell_run, req.command))

    @app.post("/shell/autocomplete")
    def shell_autocomplete(req: AutocompleteRequest, x_api_key: Optional[str] = Header(None)):
        require_key(x_api_key)
        return call(c.uc_shell_autocomplete, req.line)

    return app


__all__ = ["create_app"]
