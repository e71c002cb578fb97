"""Shell-like tokenization of the line being edited.

Only the text before the cursor matters. The last token is the prefix being
completed and may be empty (cursor right after whitespace) or start inside an
unterminated quote.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["Token", "Tokenization", "tokenize"]

QUOTES = "'\""

# Characters a backslash escapes inside double quotes (POSIX sh)
_DQUOTE_ESCAPABLE = '"\\$`'


@dataclass(frozen=True)
class Token:
    """A word of the line: its unquoted value and where it was typed.

    `literal_dollar` is set when the word starts with a `$` that was single
    quoted or escaped, so it names no variable.
    """

    text: str
    raw: str
    start: int
    end: int
    literal_dollar: bool = False


@dataclass(frozen=True)
class Tokenization:
    """Result of `tokenize`.

    `tokens` includes the prefix as last element whenever the line holds at
    least one word. `quote` is the opening quote character when the prefix
    sits inside an unterminated quote, so the front end can re-insert it.
    """

    line: str
    spans: tuple[Token, ...] = ()
    quote: str = ""

    @property
    def tokens(self) -> list[str]:
        """Unquoted words, prefix included."""
        return [span.text for span in self.spans]

    @property
    def completed(self) -> list[str]:
        """Words before the prefix."""
        return self.tokens[:-1]

    @property
    def prefix(self) -> str:
        """Unquoted text of the word under completion."""
        return self.spans[-1].text if self.spans else ""

    @property
    def raw_prefix(self) -> str:
        """Word under completion as typed, opening quote included."""
        return self.spans[-1].raw if self.spans else ""

    @property
    def prefix_is_literal(self) -> bool:
        """True when a leading `$` of the prefix is plain text."""
        if self.quote == "'":
            return True
        return self.spans[-1].literal_dollar if self.spans else False

    def rejoin(self) -> str:
        """Rebuild the line from the raw tokens and the separators between them."""
        parts: list[str] = []
        position = 0
        for span in self.spans:
            parts.append(self.line[position : span.start])
            parts.append(span.raw)
            position = span.end
        parts.append(self.line[position:])
        return "".join(parts)


def tokenize(line: str, cursor: int | None = None) -> Tokenization:
    """Split `line[:cursor]` into words.

    Args:
        line: The full line being edited
        cursor: Cursor position (end of line if None), clamped to the line

    Returns:
        The Tokenization; when the cursor follows whitespace an empty prefix
        token is appended after the completed words.
    """
    if cursor is None:
        cursor = len(line)
    text = line[: max(0, min(cursor, len(line)))]

    spans: list[Token] = []
    buffer: list[str] = []
    start = -1
    quote = ""
    escaped = False
    literal_dollar = False

    for index, char in enumerate(text):
        if escaped:
            if quote == '"' and char not in _DQUOTE_ESCAPABLE:
                buffer.append("\\")
            elif char == "$" and not buffer:
                literal_dollar = True
            buffer.append(char)
            escaped = False
            continue
        if quote == "'":
            if char == "'":
                quote = ""
            else:
                if char == "$" and not buffer:
                    literal_dollar = True
                buffer.append(char)
            continue
        if quote == '"':
            if char == "\\":
                escaped = True
            elif char == '"':
                quote = ""
            else:
                buffer.append(char)
            continue

        if char.isspace():
            if start >= 0:
                spans.append(Token("".join(buffer), text[start:index], start, index, literal_dollar))
                buffer.clear()
                start = -1
                literal_dollar = False
            continue

        if start < 0:
            start = index
        if char == "\\":
            escaped = True
        elif char in QUOTES:
            quote = char
        else:
            buffer.append(char)

    if start >= 0:
        spans.append(Token("".join(buffer), text[start:], start, len(text), literal_dollar))
    elif spans:
        spans.append(Token("", "", len(text), len(text)))

    return Tokenization(line=text, spans=tuple(spans), quote=quote)
