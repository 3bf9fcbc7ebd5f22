"""Shared-passphrase access gate."""

import secrets


class AccessGate:
    """Compares a submitted key against one configured passphrase, ignoring case.

    A gate built without a passphrase is open: every key is accepted.
    """

    def __init__(self, passphrase: str | None) -> None:
        cleaned = (passphrase or "").strip()
        self._expected = cleaned.casefold() if cleaned else None

    @property
    def enabled(self) -> bool:
        return self._expected is not None

    def check(self, key: str | None) -> bool:
        if self._expected is None:
            return True
        submitted = (key or "").strip().casefold()
        return secrets.compare_digest(
            submitted.encode("utf-8"), self._expected.encode("utf-8")
        )
