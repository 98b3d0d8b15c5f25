"""Municipality lookup — maps a billboard's municipality text to a zone name.

The billboard inventory (spreadsheet) is an external collaborator; this
directory only knows the configured list of municipality names.
"""

from collections.abc import Iterable


def _normalize(name: str) -> str:
    return " ".join((name or "").split()).casefold()


class MunicipalityDirectory:
    def __init__(self, names: Iterable[str]) -> None:
        self._by_key: dict[str, str] = {}
        for name in names:
            self._by_key.setdefault(_normalize(name), name.strip())

    def find(self, name: str) -> str | None:
        """Canonical municipality name, or None when unknown."""
        if not name:
            return None
        return self._by_key.get(_normalize(name))

    def names(self) -> list[str]:
        return list(self._by_key.values())
