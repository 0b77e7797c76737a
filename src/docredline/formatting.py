"""Formatting comparison between block versions.

Compares the fixed attribute set of two Formatting records by value.
``None`` (absent) is compared as its own value, never coerced to False.
"""

from __future__ import annotations

from .types import (
    AttributeChange,
    Block,
    DiffChange,
    FormatChange,
    Formatting,
    FormattingComparison,
    TextChange,
    TextChangeType,
    WordSegment,
)


def compare_formatting(before: Formatting, after: Formatting) -> FormattingComparison:
    """Report which formatting attributes differ.

    Returns:
        FormattingComparison with one AttributeChange per differing attribute,
        keyed by attribute name in Formatting.ATTRIBUTES order.
    """
    changes: dict[str, AttributeChange] = {}
    for name in Formatting.ATTRIBUTES:
        old = getattr(before, name)
        new = getattr(after, name)
        if not _same_value(old, new):
            changes[name] = AttributeChange(before=old, after=new)
    return FormattingComparison(changed=bool(changes), changes=changes)


def formattings_equal(before: Formatting, after: Formatting) -> bool:
    """Check if two formattings agree on every tracked attribute."""
    return all(
        _same_value(getattr(before, name), getattr(after, name))
        for name in Formatting.ATTRIBUTES
    )


def diff_formatting(
    original: Block, current: Block, word_diff: list[WordSegment]
) -> list[DiffChange]:
    """Attach formatting to each word segment of a modified block.

    Added segments carry the current block's formatting, removed segments
    the original's. Unchanged segments become a FormatChange when the
    block formatting differs, otherwise an unchanged TextChange.
    """
    comparison = compare_formatting(original.formatting, current.formatting)
    result: list[DiffChange] = []

    for segment in word_diff:
        if segment.added:
            result.append(
                TextChange(TextChangeType.INSERT, segment.value, current.formatting)
            )
        elif segment.removed:
            result.append(
                TextChange(TextChangeType.DELETE, segment.value, original.formatting)
            )
        elif comparison.changed:
            result.append(
                FormatChange(
                    text=segment.value,
                    before=original.formatting,
                    after=current.formatting,
                    changes=dict(comparison.changes),
                )
            )
        else:
            result.append(
                TextChange(
                    TextChangeType.UNCHANGED, segment.value, original.formatting
                )
            )

    return result


def _same_value(a: object, b: object) -> bool:
    # bool is an int subclass: True == 1 must not count as equal
    if a is None or b is None or isinstance(a, bool) or isinstance(b, bool):
        return a is b
    return a == b
