import json
from datetime import datetime
from pathlib import Path

import pytest

from commander.domain.errors import InvalidArgument, MalformedResponse
from commander.domain.models import AdvancedTransaction, RawTxInput
from commander.usecases.raw_cli import ListAddressGroupings, RunCliCommand
from commander.usecases.wallet import (
    BackupWallet,
    BroadcastAdvancedTransaction,
    GetReceiveAddresses,
    ListUtxos,
    NewAddress,
)
from commander.usecases.wallet_security import ImportPrivKey, UnlockWallet


class _CliStub:
    def __init__(self, replies=None):
        self.replies = replies or {}
        self.calls = []

    def run(self, args):
        self.calls.append(list(args))
        return self.replies.get(args[0], "ok")


class _ConfigStub:
    def __init__(self, data_dir):
        self.data_dir = Path(data_dir)


def test_receive_addresses_merge_balances_and_change_rows():
    groupings = [[["HReceive", 1.5], ["HChange", 0.25]]]
    received = [
        {"address": "HReceive", "label": "savings"},
        {"address": "HEmpty", "account": "legacy"},
        {"address": ""},
    ]
    cli = _CliStub(
        {
            "listaddressgroupings": json.dumps(groupings),
            "listreceivedbyaddress": json.dumps(received),
        }
    )

    plain = GetReceiveAddresses(cli)()
    with_change = GetReceiveAddresses(cli)(show_change=True)

    assert [(a.label, a.address, a.balance) for a in plain] == [
        ("savings", "HReceive", "1.50000000"),
        ("legacy", "HEmpty", "0.00000000"),
    ]
    assert with_change[-1].label == "(Change)"
    assert with_change[-1].address == "HChange"
    assert ["listreceivedbyaddress", "0", "true"] in cli.calls


def test_new_address_label_is_optional():
    cli = _CliStub()

    NewAddress(cli)("  ")
    NewAddress(cli)("shop")

    assert cli.calls == [["getnewaddress"], ["getnewaddress", "shop"]]


def test_list_utxos_parses_records():
    utxos = [{"txid": "aa", "vout": 1, "amount": 2.0, "confirmations": 10, "address": "H1"}]
    cli = _CliStub({"listunspent": json.dumps(utxos)})

    records = ListUtxos(cli)()

    assert records[0].txid == "aa"
    assert records[0].vout == 1
    assert cli.calls[0] == ["listunspent", "0", "9999999", "[]", "true"]


def test_advanced_transaction_create_sign_send():
    cli = _CliStub(
        {
            "createrawtransaction": "rawhex",
            "signrawtransaction": json.dumps({"complete": True, "hex": "signedhex"}),
            "sendrawtransaction": "txid-9",
        }
    )
    tx = AdvancedTransaction(inputs=(RawTxInput("aa", 0),), outputs={"HDest": "1.0"})

    assert BroadcastAdvancedTransaction(cli)(tx) == "txid-9"
    assert cli.calls[0] == ["createrawtransaction", '[{"txid": "aa", "vout": 0}]', '{"HDest": "1.0"}']
    assert cli.calls[1] == ["signrawtransaction", "rawhex"]
    assert cli.calls[2] == ["sendrawtransaction", "signedhex"]


def test_incomplete_signature_is_not_sent():
    cli = _CliStub(
        {
            "createrawtransaction": "rawhex",
            "signrawtransaction": json.dumps({"complete": False, "hex": "partial"}),
        }
    )
    tx = AdvancedTransaction(inputs=(RawTxInput("aa", 0),), outputs={"HDest": "1.0"})

    with pytest.raises(MalformedResponse):
        BroadcastAdvancedTransaction(cli)(tx)

    assert all(call[0] != "sendrawtransaction" for call in cli.calls)


def test_backup_uses_timestamped_name_in_data_dir(tmp_path):
    cli = _CliStub()
    uc = BackupWallet(cli, _ConfigStub(tmp_path), now=lambda: datetime(2024, 1, 2, 3, 4, 5))

    dest = uc()

    assert dest == str(tmp_path / "hemp0x_backup_20240102_030405.dat")
    assert cli.calls == [["backupwallet", dest]]


def test_security_commands():
    cli = _CliStub()

    UnlockWallet(cli)("pw", 300)
    ImportPrivKey(cli)("Kx", "imported", True)

    assert cli.calls == [
        ["walletpassphrase", "pw", "300"],
        ["importprivkey", "Kx", "imported", "true"],
    ]
    with pytest.raises(InvalidArgument):
        UnlockWallet(cli)("pw", -1)


def test_raw_cli_command_splits_quoted_args():
    cli = _CliStub()

    RunCliCommand(cli)("getnewaddress", '"my label"')

    assert cli.calls == [["getnewaddress", "my label"]]
    with pytest.raises(InvalidArgument):
        RunCliCommand(cli)("  ", "")


def test_address_groupings_are_parsed():
    cli = _CliStub({"listaddressgroupings": "[[[\"H1\", 1]]]"})

    assert ListAddressGroupings(cli)() == [[["H1", 1]]]
