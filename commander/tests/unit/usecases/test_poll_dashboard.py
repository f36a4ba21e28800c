import json

import pytest

from commander.domain.dashboard import LockStatus, NodeState
from commander.domain.errors import MalformedResponse, ProcessExitedNonZero
from commander.usecases.poll_dashboard import PollDashboard

NOW = 1_700_000_000


class _CliStub:
    def __init__(self, replies):
        self.replies = dict(replies)
        self.calls = []

    def run(self, args):
        self.calls.append(list(args))
        reply = self.replies[args[0]]
        if isinstance(reply, Exception):
            raise reply
        return reply


class _LivenessStub:
    def __init__(self, running):
        self.running = running

    def is_running(self):
        return self.running


def _getinfo(**overrides):
    payload = {
        "blocks": 1000,
        "connections": 8,
        "difficulty": 12.3456789,
        "balance": 5.5,
        "unconfirmed_balance": 0,
        "immature_balance": 1.25,
        "unlocked_until": 0,
    }
    payload.update(overrides)
    return json.dumps(payload)


def _chain(**overrides):
    payload = {
        "blocks": 1000,
        "headers": 1000,
        "verificationprogress": 0.9999,
        "initialblockdownload": False,
        "mediantime": NOW - 600,
    }
    payload.update(overrides)
    return json.dumps(payload)


def test_offline_snapshot_makes_no_cli_call():
    cli = _CliStub({})
    uc = PollDashboard(cli=cli, liveness=_LivenessStub(False), clock=lambda: NOW)

    snap = uc()

    assert snap.node.state is NodeState.OFFLINE
    assert snap.wallet.balance == "--"
    assert cli.calls == []


def test_running_synced_locked_snapshot():
    cli = _CliStub(
        {
            "getinfo": _getinfo(),
            "getblockchaininfo": _chain(),
            "listtransactions": "[]",
        }
    )
    uc = PollDashboard(cli=cli, liveness=_LivenessStub(True), clock=lambda: NOW)

    snap = uc()

    assert snap.node.state is NodeState.RUNNING
    assert snap.node.blocks == 1000
    assert snap.node.headers == 1000
    assert snap.node.peers == 8
    assert snap.node.difficulty == "12.3457"
    assert snap.node.synced is True
    assert snap.wallet.balance == "5.500"
    assert snap.wallet.pending == "0.000"
    assert snap.wallet.staked == "1.250"
    assert snap.wallet.lock_status is LockStatus.LOCKED
    assert [call[0] for call in cli.calls] == ["getinfo", "getblockchaininfo", "listtransactions"]
    assert cli.calls[-1] == ["listtransactions", "*", "100"]


def test_unencrypted_wallet_when_unlocked_until_missing():
    info = json.loads(_getinfo())
    del info["unlocked_until"]
    cli = _CliStub(
        {"getinfo": json.dumps(info), "getblockchaininfo": _chain(), "listtransactions": "[]"}
    )

    snap = PollDashboard(cli=cli, liveness=_LivenessStub(True), clock=lambda: NOW)()

    assert snap.wallet.lock_status is LockStatus.UNENCRYPTED


def test_blockchain_info_failure_falls_back_to_getinfo_blocks():
    cli = _CliStub(
        {
            "getinfo": _getinfo(blocks=777),
            "getblockchaininfo": ProcessExitedNonZero("CLI error", exit_code=1),
            "listtransactions": "[]",
        }
    )

    snap = PollDashboard(cli=cli, liveness=_LivenessStub(True), clock=lambda: NOW)()

    assert snap.node.blocks == 777
    assert snap.node.headers == 777
    assert snap.node.synced is False


def test_transactions_are_ordered_and_formatted():
    txs = [
        {"time": 100, "category": "receive", "amount": 1, "confirmations": 3, "txid": "r100"},
        {"time": 100, "category": "send", "amount": -2.5, "confirmations": 3, "txid": "s100"},
        {"time": 200, "category": "receive", "amount": 0.1, "confirmations": -1, "txid": "r200"},
        {"time": 50, "amount": 4},
    ]
    cli = _CliStub(
        {"getinfo": _getinfo(), "getblockchaininfo": _chain(), "listtransactions": json.dumps(txs)}
    )

    snap = PollDashboard(cli=cli, liveness=_LivenessStub(True), clock=lambda: NOW)()

    assert [tx.txid for tx in snap.transactions] == ["r200", "r100", "s100", "-"]
    assert snap.transactions[2].amount == "-2.5000000"
    assert snap.transactions[0].confirmations == 0
    assert snap.transactions[3].category == "unknown"
    assert len(snap.transactions[0].date) == len("01/02 03:04")


def test_getinfo_failure_propagates():
    cli = _CliStub({"getinfo": ProcessExitedNonZero("CLI error", exit_code=28)})

    with pytest.raises(ProcessExitedNonZero):
        PollDashboard(cli=cli, liveness=_LivenessStub(True))()


def test_non_list_transactions_is_malformed():
    cli = _CliStub(
        {"getinfo": _getinfo(), "getblockchaininfo": _chain(), "listtransactions": '{"a": 1}'}
    )

    with pytest.raises(MalformedResponse):
        PollDashboard(cli=cli, liveness=_LivenessStub(True), clock=lambda: NOW)()
