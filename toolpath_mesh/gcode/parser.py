"""
GCODE line tokenizer

Cursor-based scanning of a decoded G-code buffer. Every function takes the
buffer and a position into it and returns the advanced position, so the
segment builder can walk a whole program without splitting it into lines.

Only the X, Y, Z and E words are recorded; any other word is skipped.
Numeric parsing is permissive: a malformed value reads as 0.0 instead of
failing the import.
"""

import logging
import re
from dataclasses import dataclass

from toolpath_mesh.config import COMMENT_CHAR

logger = logging.getLogger(__name__)

SPACES = " \t"
LINE_ENDS = "\r\n\0"

# Locale-independent float literal, matched as a prefix of the value token.
# No exponent form: "E" after a number starts the extrusion word.
NUMBER_PATTERN = re.compile(
    r"[+-]?(?:inf(?:inity)?|nan|\d+\.?\d*|\.\d+)",
    re.IGNORECASE,
)
CODE_PATTERN = re.compile(r"\d+")


@dataclass
class GcodeLine:
    """Coordinate words of one command line; None means the word was absent"""

    x: float | None = None
    y: float | None = None
    z: float | None = None
    e: float | None = None

    def has_x(self) -> bool:
        return self.x is not None

    def has_y(self) -> bool:
        return self.y is not None

    def has_z(self) -> bool:
        return self.z is not None

    def has_e(self) -> bool:
        return self.e is not None

    def has_axis(self) -> bool:
        """True if any of X, Y or Z is present"""
        return self.has_x() or self.has_y() or self.has_z()

    def is_empty(self) -> bool:
        return not self.has_axis() and not self.has_e()

    def get_x(self, default: float = 0.0) -> float:
        return self.x if self.x is not None else default

    def get_y(self, default: float = 0.0) -> float:
        return self.y if self.y is not None else default

    def get_z(self, default: float = 0.0) -> float:
        return self.z if self.z is not None else default

    def get_e(self, default: float = 0.0) -> float:
        return self.e if self.e is not None else default

    def __str__(self):
        words = []
        for letter in ("x", "y", "z", "e"):
            value = getattr(self, letter)
            if value is not None:
                words.append(f"{letter.upper()}{value:.10g}")
        return " ".join(words)


def is_space(ch: str) -> bool:
    return ch in SPACES


def is_line_end(ch: str) -> bool:
    return ch in LINE_ENDS


def is_comment(ch: str) -> bool:
    return ch == COMMENT_CHAR


def skip_spaces(text: str, pos: int) -> int:
    """Advance past spaces and tabs on the current line"""
    end = len(text)
    while pos < end and is_space(text[pos]):
        pos += 1
    return pos


def skip_spaces_and_line_end(text: str, pos: int) -> int:
    """Advance past any whitespace, including line terminators"""
    end = len(text)
    while pos < end and (is_space(text[pos]) or is_line_end(text[pos])):
        pos += 1
    return pos


def skip_line(text: str, pos: int) -> int:
    """Advance to the first character after the current line's terminators"""
    end = len(text)
    while pos < end and not is_line_end(text[pos]):
        pos += 1
    while pos < end and is_line_end(text[pos]):
        pos += 1
    return pos


def skip_value(text: str, pos: int) -> int:
    """Advance past a word's value, stopping at whitespace or a comment"""
    end = len(text)
    while pos < end:
        ch = text[pos]
        if is_space(ch) or is_line_end(ch) or is_comment(ch):
            break
        pos += 1
    return pos


def read_number(text: str, pos: int) -> tuple[float, int]:
    """
    Read a float literal starting at pos

    The cursor stops right after the literal, so a following word with no
    separating space ("X10Y5") is left for the caller to read.

    Args:
        text: Buffer being scanned
        pos: Position of the first character of the value

    Returns:
        Tuple of (value, new position). Malformed text yields 0.0 and only
        a leading sign and/or dot is consumed.
    """
    match = NUMBER_PATTERN.match(text, pos)
    if match is None:
        logger.trace(f"Malformed numeric value at offset {pos}, using 0.0")
        end = len(text)
        if pos < end and text[pos] in "+-":
            pos += 1
        if pos < end and text[pos] == ".":
            pos += 1
        return 0.0, pos
    return float(match.group(0)), match.end()


def read_command_code(text: str, pos: int) -> tuple[int, int]:
    """
    Read the unsigned integer code following the command letter

    Returns:
        Tuple of (code, new position); 0 if no digits are present
    """
    match = CODE_PATTERN.match(text, pos)
    if match is None:
        return 0, pos
    return int(match.group(0)), match.end()


def read_gcode_line(text: str, pos: int) -> tuple[GcodeLine, int]:
    """
    Tokenize the argument region of one command line

    Scanning stops at the end of the line or at a comment marker. The cursor
    is left on the comment marker or line terminator; the caller skips the
    rest of the line.

    Args:
        text: Buffer being scanned
        pos: Position just after the command letter and its numeric code

    Returns:
        Tuple of (GcodeLine, new position)
    """
    line = GcodeLine()
    end = len(text)
    while True:
        pos = skip_spaces(text, pos)
        if pos >= end or is_line_end(text[pos]):
            break
        letter = text[pos].upper()
        if is_comment(letter):
            break
        pos += 1
        if letter == "X":
            line.x, pos = read_number(text, pos)
        elif letter == "Y":
            line.y, pos = read_number(text, pos)
        elif letter == "Z":
            line.z, pos = read_number(text, pos)
        elif letter == "E":
            line.e, pos = read_number(text, pos)
        else:
            pos = skip_value(text, pos)
    return line, pos


def parse_line(line: str) -> tuple[str | None, int, GcodeLine]:
    """
    Parse a complete single line such as "G1 X10 E0.5 ; comment"

    Returns:
        Tuple of (command letter or None for blank/comment lines, code, words)
    """
    pos = skip_spaces(line, 0)
    if pos >= len(line) or is_comment(line[pos]) or is_line_end(line[pos]):
        return None, 0, GcodeLine()
    letter = line[pos].upper()
    code, pos = read_command_code(line, pos + 1)
    words, _ = read_gcode_line(line, pos)
    return letter, code, words
