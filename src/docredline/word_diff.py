"""Word-level text diffing on top of diff-match-patch.

Each word (a run of non-whitespace plus its trailing whitespace) is mapped
to a single character, the encoded strings are diffed with
diff-match-patch, and the result is mapped back to word segments. This is
the same trick diff-match-patch uses for line mode, applied to words.
"""

from __future__ import annotations

import re

from diff_match_patch import diff_match_patch

from .types import SegmentStatus, WordSegment

_WORD_RE = re.compile(r"\S+\s*")

_STATUS_BY_OP: dict[int, SegmentStatus] = {
    diff_match_patch.DIFF_DELETE: SegmentStatus.REMOVED,
    diff_match_patch.DIFF_INSERT: SegmentStatus.ADDED,
    diff_match_patch.DIFF_EQUAL: SegmentStatus.UNCHANGED,
}


def tokenize(text: str) -> list[str]:
    """Split text into word tokens.

    Every token is a word plus its trailing whitespace. Leading whitespace
    is folded into the first token so that joining the tokens gives back
    the input exactly.
    """
    tokens = _WORD_RE.findall(text)
    if not tokens:
        return [text] if text else []
    lead = len(text) - len(text.lstrip())
    if lead:
        tokens[0] = text[:lead] + tokens[0]
    return tokens


class WordDiffer:
    """Computes word-granular diffs between two strings."""

    def __init__(self) -> None:
        self._dmp = diff_match_patch()
        # No timeout: always finish bisection for a minimal diff
        self._dmp.Diff_Timeout = 0

    def diff(self, original: str, current: str) -> list[WordSegment]:
        """Diff two strings word by word.

        Tokens compare by their non-whitespace part, so changes in spacing
        alone never produce added or removed segments. Removed segments
        carry original text; added and unchanged segments carry current
        text.

        When an unchanged run ends one text but not the other, the
        whitespace after its last word moves to the front of the changed
        tail. Removed plus unchanged segments then join back to the
        original, and added plus unchanged segments to the current text,
        as long as the shared words are spaced alike.

        Returns:
            Ordered segments with adjacent segments of equal status merged
        """
        original_tokens = tokenize(original)
        current_tokens = tokenize(current)

        codes: dict[str, str] = {}
        original_chars = self._encode(original_tokens, codes)
        current_chars = self._encode(current_tokens, codes)

        segments: list[WordSegment] = []
        o_pos = 0
        c_pos = 0
        carry = ""
        for op, chars in self._dmp.diff_main(original_chars, current_chars, False):
            n = len(chars)
            if op == diff_match_patch.DIFF_DELETE:
                value = carry + "".join(original_tokens[o_pos : o_pos + n])
                carry = ""
                o_pos += n
            elif op == diff_match_patch.DIFF_INSERT:
                value = carry + "".join(current_tokens[c_pos : c_pos + n])
                carry = ""
                c_pos += n
            else:
                value = "".join(current_tokens[c_pos : c_pos + n])
                o_pos += n
                c_pos += n
                original_ws = _trailing_whitespace(original_tokens[o_pos - 1])
                current_ws = _trailing_whitespace(current_tokens[c_pos - 1])
                if not current_ws and o_pos < len(original_tokens):
                    # Current text ends here; only removals follow
                    carry = original_ws
                elif not original_ws and c_pos < len(current_tokens):
                    # Original text ends here; only additions follow
                    value = value[: len(value) - len(current_ws)]
                    carry = current_ws
            _append(segments, WordSegment(value, _STATUS_BY_OP[op]))

        return segments

    @staticmethod
    def _encode(tokens: list[str], codes: dict[str, str]) -> str:
        """Map each token to one character, sharing codes across both texts."""
        chars = []
        for token in tokens:
            key = token.strip()
            code = codes.get(key)
            if code is None:
                # Skip the surrogate block so the encoded string stays valid
                n = len(codes) + 1
                code = chr(n if n < 0xD800 else n + 0x800)
                codes[key] = code
            chars.append(code)
        return "".join(chars)


def _trailing_whitespace(token: str) -> str:
    return token[len(token.rstrip()) :]


def _append(segments: list[WordSegment], segment: WordSegment) -> None:
    if not segment.value:
        return
    if segments and segments[-1].status is segment.status:
        segments[-1] = WordSegment(segments[-1].value + segment.value, segment.status)
    else:
        segments.append(segment)


def diff_words(original: str, current: str) -> list[WordSegment]:
    """Diff two strings word by word with a fresh WordDiffer."""
    return WordDiffer().diff(original, current)
