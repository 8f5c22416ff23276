"""
Assembly of classified lines into catalog entries.

The builder is a small state machine. ``step`` takes the current state and
one classified line and returns the next state together with the entry that
the line sealed, if any. ``finish`` seals whatever is left at end of input.
States are never modified; every step works on a copy of the draft entry.
"""
from __future__ import annotations

from dataclasses import dataclass, replace

from po_errors import PoStructureError
from po_lines import (
    COMMENT_KINDS,
    Blank,
    Continuation,
    ExtractedComment,
    Flags,
    Keyword,
    Line,
    PreviousContext,
    Reference,
    TranslatorComment,
)
from po_models import Entry


# Keywords that open a new entry once the current one has a msgid
ENTRY_OPENERS = ('msgctxt', 'msgid')


@dataclass(frozen=True)
class BuilderState:
    draft: Entry | None = None
    # (field, plural index) that a continuation line extends
    target: tuple[str, int | None] | None = None
    has_msgid: bool = False


def _copy_entry(entry: Entry | None) -> Entry:
    if entry is None:
        return Entry()
    return replace(
        entry,
        msgstr_plural=dict(entry.msgstr_plural) if entry.msgstr_plural is not None else None,
        comments=list(entry.comments),
        extracted_comments=list(entry.extracted_comments),
        references=list(entry.references),
        flags=dict(entry.flags),
    )


def _read_field(entry: Entry, name: str, index: int | None) -> str:
    if index is not None:
        return (entry.msgstr_plural or {}).get(index, '')
    return getattr(entry, name) or ''


def _write_field(entry: Entry, name: str, index: int | None, value: str) -> None:
    if index is not None:
        if entry.msgstr_plural is None:
            entry.msgstr_plural = {}
        entry.msgstr_plural[index] = value
    else:
        setattr(entry, name, value)


def _add_comment(entry: Entry, line: Line) -> None:
    if isinstance(line, TranslatorComment):
        entry.comments.append(line.text)
    elif isinstance(line, ExtractedComment):
        entry.extracted_comments.append(line.text)
    elif isinstance(line, Reference):
        entry.references.append(line.text)
    elif isinstance(line, Flags):
        for name in line.names:
            entry.flags[name] = True
    elif isinstance(line, PreviousContext):
        pass


def step(state: BuilderState, line: Line) -> tuple[BuilderState, Entry | None]:
    """Apply one classified line; return the new state and any sealed entry."""
    if isinstance(line, Blank):
        if state.has_msgid:
            return BuilderState(), state.draft
        # Blank lines before the first msgid of an entry are not boundaries
        return state, None

    sealed = None
    if isinstance(line, COMMENT_KINDS):
        if state.has_msgid:
            state, sealed = BuilderState(), state.draft
        draft = _copy_entry(state.draft)
        _add_comment(draft, line)
        target = None

    elif isinstance(line, Keyword):
        if line.field in ENTRY_OPENERS:
            if state.has_msgid:
                state, sealed = BuilderState(), state.draft
        elif not state.has_msgid:
            raise PoStructureError(f'{line.field} without a preceding msgid', line.lineno)
        draft = _copy_entry(state.draft)
        _write_field(draft, line.field, line.index, line.value)
        target = (line.field, line.index)

    elif isinstance(line, Continuation):
        if state.target is None:
            raise PoStructureError('string continuation with no open msgid or msgstr', line.lineno)
        name, index = state.target
        draft = _copy_entry(state.draft)
        _write_field(draft, name, index, _read_field(draft, name, index) + line.value)
        target = state.target

    else:
        raise TypeError(f'not a classified PO line: {line!r}')

    if line.obsolete:
        draft.obsolete = True
    next_state = BuilderState(
        draft=draft,
        target=target,
        has_msgid=state.has_msgid or (isinstance(line, Keyword) and line.field == 'msgid'),
    )
    return next_state, sealed


def finish(state: BuilderState) -> Entry | None:
    """Seal the trailing entry at end of input.

    Comments that never got a msgid are dropped.
    """
    if state.has_msgid:
        return state.draft
    return None
