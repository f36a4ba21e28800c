from __future__ import annotations
import json, os, shutil
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Sequence
from commander.domain.models import AddressBookEntry, DataFolderInfo
from commander.domain.ports import StoragePort
from commander.domain.util import format_size
from commander.adapters.config_file import CONFIG_FILE_NAME


class StorageLocal(StoragePort):
    """Local filesystem storage inside the node data dir (JSON, wallet, logs)."""

    ADDRESS_BOOK = "address_book.json"
    WALLET_FILE = "wallet.dat"
    LOG_FILE = "debug.log"
    BACKUP_DIR = "wallet_backups"
    _LOG_TAIL_BYTES = 2 * 1024 * 1024

    def __init__(self, root_dir: str = ".", *, now: Callable[[], datetime] = datetime.now) -> None:
        self.root = str(root_dir)
        self._now = now

    # ---- Address book (JSON) ----
    def load_address_book(self) -> List[AddressBookEntry]:
        path = os.path.join(self.root, self.ADDRESS_BOOK)
        if not os.path.exists(path):
            return []
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
        try:
            payload = json.loads(text)
        except ValueError:
            # unreadable book -> empty list
            return []
        if not isinstance(payload, list):
            return []
        return [AddressBookEntry.from_dict(item) for item in payload if isinstance(item, dict)]

    def save_address_book(self, entries: Sequence[AddressBookEntry]) -> None:
        os.makedirs(self.root, exist_ok=True)
        path = os.path.join(self.root, self.ADDRESS_BOOK)
        with open(path, "w", encoding="utf-8") as f:
            json.dump([entry.to_dict() for entry in entries], f, ensure_ascii=False, indent=2)

    # ---- Data folder ----
    def data_folder_info(self) -> DataFolderInfo:
        folder_exists = os.path.isdir(self.root)
        size_bytes = self.directory_size(self.root) if folder_exists else 0
        return DataFolderInfo(
            path=self.root,
            size_bytes=size_bytes,
            size_display=format_size(size_bytes),
            config_exists=os.path.exists(os.path.join(self.root, CONFIG_FILE_NAME)),
            wallet_exists=os.path.exists(os.path.join(self.root, self.WALLET_FILE)),
            folder_exists=folder_exists,
        )

    @staticmethod
    def directory_size(root: str) -> int:
        """Total file size below ``root``, walked with an explicit stack."""
        total = 0
        stack = [root]
        while stack:
            current = stack.pop()
            try:
                entries = list(os.scandir(current))
            except OSError:
                continue
            for entry in entries:
                try:
                    if entry.is_dir(follow_symlinks=False):
                        stack.append(entry.path)
                    elif entry.is_file(follow_symlinks=False):
                        total += entry.stat(follow_symlinks=False).st_size
                except OSError:
                    continue
        return total

    def read_log_tail(self, max_lines: int) -> str:
        path = os.path.join(self.root, self.LOG_FILE)
        if not os.path.exists(path):
            return "Log file not found."
        size = os.path.getsize(path)
        with open(path, "rb") as f:
            f.seek(max(0, size - self._LOG_TAIL_BYTES))
            text = f.read().decode("utf-8", errors="replace")
        lines = text.splitlines()
        if max_lines <= 0:
            return ""
        return "\n".join(lines[-max_lines:])

    # ---- Wallet file ----
    def replace_wallet(self, source: Optional[Path], *, backup_existing: bool) -> Optional[Path]:
        """Move aside (or delete) ``wallet.dat`` and optionally copy ``source`` in.

        Returns the backup path when the existing wallet was preserved.
        """
        wallet = Path(self.root) / self.WALLET_FILE
        backup: Optional[Path] = None
        if wallet.exists() and backup_existing:
            backup_dir = Path(self.root) / self.BACKUP_DIR
            backup_dir.mkdir(parents=True, exist_ok=True)
            stamp = self._now().strftime("%Y%m%d_%H%M%S")
            backup = backup_dir / f"wallet_{stamp}.bak"
            shutil.move(str(wallet), str(backup))
        elif wallet.exists():
            wallet.unlink()
        if source is not None:
            shutil.copyfile(str(source), str(wallet))
        return backup
