from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from ..domain.models import AddressBookEntry
from ..domain.ports import StoragePort


@dataclass
class LoadAddressBook:
    storage: StoragePort

    def __call__(self) -> List[AddressBookEntry]:
        return self.storage.load_address_book()


@dataclass
class SaveAddressBook:
    storage: StoragePort

    def __call__(self, entries: Sequence[AddressBookEntry]) -> None:
        self.storage.save_address_book(list(entries))


__all__ = ["LoadAddressBook", "SaveAddressBook"]
