from __future__ import annotations


class WordVaultError(Exception):
    """Base class for every error raised by the journal services."""


class ValidationError(WordVaultError):
    pass


class EmptyTextError(ValidationError):
    def __init__(self, message: str = "Text must not be empty") -> None:
        super().__init__(message)


class DuplicateItemError(ValidationError):
    def __init__(self, text: str) -> None:
        super().__init__(f"'{text}' already exists")
        self.text = text


class CollectionNameError(ValidationError):
    pass


class ItemNotFoundError(WordVaultError):
    def __init__(self, kind: str, item_id: str) -> None:
        super().__init__(f"{kind.capitalize()} not found")
        self.kind = kind
        self.item_id = item_id


class PersistenceError(WordVaultError):
    pass


class ProviderError(WordVaultError):
    pass


class DictionaryNotFoundError(ProviderError):
    def __init__(self, word: str) -> None:
        super().__init__(f"No definition found for '{word}'")
        self.word = word


class ImportFileError(WordVaultError):
    pass
