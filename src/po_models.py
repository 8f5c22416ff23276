from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Entry:
    """One message of a PO catalog."""

    msgid: str = ''
    msgid_plural: str | None = None
    msgstr: str = ''
    msgstr_plural: dict[int, str] | None = None
    msgctxt: str | None = None
    comments: list[str] = field(default_factory=list)
    extracted_comments: list[str] = field(default_factory=list)
    references: list[str] = field(default_factory=list)
    flags: dict[str, bool] = field(default_factory=dict)
    obsolete: bool = False

    @property
    def fuzzy(self) -> bool:
        return self.flags.get('fuzzy', False)

    @property
    def key(self) -> tuple[str | None, str]:
        return (self.msgctxt, self.msgid)

    def is_translated(self) -> bool:
        if self.msgstr_plural:
            return all(v.strip() != '' for v in self.msgstr_plural.values())
        return self.msgstr.strip() != ''


@dataclass
class Catalog:
    headers: dict[str, str] = field(default_factory=dict)
    extracted_comments: list[str] = field(default_factory=list)
    # Translator comments of the header entry (usually the copyright block)
    comments: list[str] = field(default_factory=list)
    items: list[Entry] = field(default_factory=list)

    @property
    def plural_forms(self) -> str | None:
        return self.headers.get('Plural-Forms')

    def find(self, msgid: str, msgctxt: str | None = None) -> Entry | None:
        for item in self.items:
            if item.msgid == msgid and item.msgctxt == msgctxt:
                return item
        return None
