import pytest

from commander.domain.errors import InvalidArgument
from commander.domain.network import (
    NetworkMode,
    detect_network_mode,
    mode_from_config,
    rewrite_network_flags,
)


def test_regtest_takes_precedence_over_testnet():
    lines = ["rpcuser=u1", "testnet=1", "regtest=1"]

    assert detect_network_mode(lines) is NetworkMode.REGTEST


def test_no_flags_means_mainnet():
    assert detect_network_mode(["rpcuser=u1", "server=1"]) is NetworkMode.MAINNET
    assert detect_network_mode([]) is NetworkMode.MAINNET


def test_flags_are_matched_after_trimming_whitespace():
    assert detect_network_mode(["   testnet=1  "]) is NetworkMode.TESTNET


def test_zero_flag_does_not_select_mode():
    assert detect_network_mode(["testnet=0"]) is NetworkMode.MAINNET


def test_mode_from_parsed_values_matches_line_scan():
    assert mode_from_config({"testnet": "1", "regtest": "1"}) is NetworkMode.REGTEST
    assert mode_from_config({"testnet": "1"}) is NetworkMode.TESTNET
    assert mode_from_config({"testnet": "0"}) is NetworkMode.MAINNET


def test_rewrite_leaves_exactly_one_flag_line():
    lines = ["rpcuser=u1", "testnet=1", "regtest=0", "server=1", "  regtest=1"]

    result = rewrite_network_flags(lines, NetworkMode.TESTNET)

    assert result == ["rpcuser=u1", "server=1", "testnet=1"]


def test_rewrite_to_mainnet_removes_all_flags():
    result = rewrite_network_flags(["testnet=1", "regtest=1", "listen=1"], NetworkMode.MAINNET)

    assert result == ["listen=1"]


def test_parse_accepts_case_and_whitespace():
    assert NetworkMode.parse(" TestNet ") is NetworkMode.TESTNET


def test_parse_rejects_unknown_mode():
    with pytest.raises(InvalidArgument) as exc_info:
        NetworkMode.parse("signet")

    assert exc_info.value.message == "Invalid network mode"


def test_cli_flags():
    assert NetworkMode.MAINNET.cli_flag is None
    assert NetworkMode.TESTNET.cli_flag == "-testnet"
    assert NetworkMode.REGTEST.flag_line == "regtest=1"
