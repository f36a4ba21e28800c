import json
from datetime import datetime

from commander.adapters.storage_local import StorageLocal
from commander.domain.models import AddressBookEntry


def _fixed_now():
    return datetime(2024, 5, 6, 7, 8, 9)


def test_address_book_roundtrip(tmp_path):
    storage = StorageLocal(root_dir=str(tmp_path))
    entries = [AddressBookEntry(label="Alice", address="HAbc", locked=True, date=1700000000)]

    storage.save_address_book(entries)

    raw = json.loads((tmp_path / "address_book.json").read_text(encoding="utf-8"))
    assert raw == [{"label": "Alice", "address": "HAbc", "locked": True, "date": 1700000000}]
    assert storage.load_address_book() == entries


def test_address_book_save_creates_missing_data_dir(tmp_path):
    root = tmp_path / "fresh" / "data"
    storage = StorageLocal(root_dir=str(root))
    entries = [AddressBookEntry(label="Bob", address="HBob", locked=False, date=1)]

    storage.save_address_book(entries)

    assert (root / "address_book.json").is_file()
    assert storage.load_address_book() == entries


def test_missing_or_unreadable_book_is_empty(tmp_path):
    storage = StorageLocal(root_dir=str(tmp_path))
    assert storage.load_address_book() == []

    (tmp_path / "address_book.json").write_text("{not json", encoding="utf-8")
    assert storage.load_address_book() == []


def test_data_folder_info_counts_nested_files(tmp_path):
    (tmp_path / "blocks" / "index").mkdir(parents=True)
    (tmp_path / "blocks" / "index" / "a.ldb").write_bytes(b"x" * 1000)
    (tmp_path / "wallet.dat").write_bytes(b"y" * 1048)
    storage = StorageLocal(root_dir=str(tmp_path))

    info = storage.data_folder_info()

    assert info.size_bytes == 2048
    assert info.size_display == "2.00 KB"
    assert info.wallet_exists is True
    assert info.config_exists is False
    assert info.folder_exists is True


def test_data_folder_info_for_missing_dir(tmp_path):
    info = StorageLocal(root_dir=str(tmp_path / "missing")).data_folder_info()

    assert info.folder_exists is False
    assert info.size_bytes == 0
    assert info.size_display == "0 bytes"


def test_log_tail_returns_last_lines(tmp_path):
    lines = [f"line {i}" for i in range(300)]
    (tmp_path / "debug.log").write_text("\n".join(lines) + "\n", encoding="utf-8")
    storage = StorageLocal(root_dir=str(tmp_path))

    tail = storage.read_log_tail(200)

    assert tail.splitlines()[0] == "line 100"
    assert tail.splitlines()[-1] == "line 299"
    assert len(tail.splitlines()) == 200


def test_log_tail_without_file(tmp_path):
    assert StorageLocal(root_dir=str(tmp_path)).read_log_tail(10) == "Log file not found."


def test_replace_wallet_backs_up_existing(tmp_path):
    (tmp_path / "wallet.dat").write_bytes(b"old")
    source = tmp_path / "restore.dat"
    source.write_bytes(b"new")
    storage = StorageLocal(root_dir=str(tmp_path), now=_fixed_now)

    backup = storage.replace_wallet(source, backup_existing=True)

    assert backup == tmp_path / "wallet_backups" / "wallet_20240506_070809.bak"
    assert backup.read_bytes() == b"old"
    assert (tmp_path / "wallet.dat").read_bytes() == b"new"


def test_replace_wallet_without_backup_deletes_old(tmp_path):
    (tmp_path / "wallet.dat").write_bytes(b"old")
    storage = StorageLocal(root_dir=str(tmp_path))

    assert storage.replace_wallet(None, backup_existing=False) is None
    assert not (tmp_path / "wallet.dat").exists()
    assert not (tmp_path / "wallet_backups").exists()
