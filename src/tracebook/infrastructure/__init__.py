"""Infrastructure layer: concrete implementations of application ports."""

from tracebook.infrastructure.address_book import AddressBook
from tracebook.infrastructure.json_storage import JsonAddressBookStorage

__all__ = [
    "AddressBook",
    "JsonAddressBookStorage",
]
