"""PGN parsing and serialization helpers."""

from __future__ import annotations

import re

from gambit.core.enums import GameResult
from gambit.core.notation.models import ParsedPgn, PgnMove

_TAG_PAIR_RE = re.compile(r'^\[(\w+)\s+"((?:[^"\\]|\\.)*)"\]$')
_TAG_ESCAPE_RE = re.compile(r"\\(.)")

# One movetext token per match; brace comments may run to end of text.
_MOVETEXT_TOKEN_RE = re.compile(
    r"""
      (?P<brace>\{[^}]*\}?)
    | (?P<rest_of_line>;[^\n]*)
    | (?P<open>\()
    | (?P<close>\))
    | (?P<nag>\$\d+)
    | (?P<word>[^\s{};()]+)
    """,
    re.VERBOSE,
)
_MOVE_NUMBER_RE = re.compile(r"^\d+\.+")

_TOKEN_BY_RESULT: dict[GameResult, str] = {
    GameResult.WHITE_WINS: "1-0",
    GameResult.BLACK_WINS: "0-1",
    GameResult.DRAW: "1/2-1/2",
    GameResult.IN_PROGRESS: "*",
}
_RESULT_BY_TOKEN: dict[str, GameResult] = {v: k for k, v in _TOKEN_BY_RESULT.items()}


def pgn_result_token(result: GameResult) -> str:
    """Convert :class:`GameResult` to a PGN result token."""
    return _TOKEN_BY_RESULT[result]


def game_result_from_pgn(token: str) -> GameResult:
    """Convert a PGN result token to :class:`GameResult` (unknown -> in progress)."""
    return _RESULT_BY_TOKEN.get(token, GameResult.IN_PROGRESS)


def pgn_movetext_from_sans(
    sans: list[str],
    result_token: str,
    *,
    start_ply: int = 0,
) -> str:
    """Build PGN movetext from SAN moves and a result token.

    *start_ply* is the number of half-moves already played before the first
    SAN (non-zero when the game started from a custom FEN).
    """
    parts: list[str] = []
    for offset, san in enumerate(sans):
        move_number, black_to_move = divmod(start_ply + offset, 2)
        if not black_to_move:
            parts.append(f"{move_number + 1}.")
        elif offset == 0:
            parts.append(f"{move_number + 1}...")
        parts.append(san)
    parts.append(result_token)
    return " ".join(parts)


def _escape_tag_value(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def build_pgn(
    headers: dict[str, str],
    sans: list[str],
    result_token: str,
    *,
    start_ply: int = 0,
) -> str:
    """Build a single-game PGN document: tag pairs, blank line, movetext."""
    tag_lines = [
        f'[{key} "{_escape_tag_value(value)}"]' for key, value in headers.items()
    ]
    movetext = pgn_movetext_from_sans(sans, result_token, start_ply=start_ply)
    return "\n".join([*tag_lines, "", movetext, ""])


def _parse_tag_pair(line: str) -> tuple[str, str]:
    match = _TAG_PAIR_RE.match(line)
    if match is None:
        raise ValueError(f"Invalid PGN header line: {line}")
    key, raw_value = match.groups()
    return key, _TAG_ESCAPE_RE.sub(r"\1", raw_value)


def _attach_comment(moves: list[PgnMove], text: str) -> None:
    """Comments belong to the preceding mainline move; leading ones are dropped."""
    clean = " ".join(text.split())
    if not moves or not clean:
        return
    last = moves[-1]
    last.comment = f"{last.comment} {clean}" if last.comment else clean


def _parse_movetext(movetext: str) -> tuple[list[PgnMove], str]:
    """Mainline moves (with comments) and the result token of *movetext*.

    Variations, NAGs and move numbers are skipped.
    """
    moves: list[PgnMove] = []
    result_token = "*"
    depth = 0

    for match in _MOVETEXT_TOKEN_RE.finditer(movetext):
        kind = match.lastgroup
        text = match.group()

        if kind == "open":
            depth += 1
            continue
        if kind == "close":
            depth = max(0, depth - 1)
            continue
        if depth or kind == "nag":
            continue

        if kind == "brace":
            _attach_comment(moves, text[1:].removesuffix("}"))
        elif kind == "rest_of_line":
            _attach_comment(moves, text[1:])
        elif text in _RESULT_BY_TOKEN:
            result_token = text
        else:
            # "12." / "12..." alone, or glued as in "1.e4" / "3...Nf6"
            san = _MOVE_NUMBER_RE.sub("", text)
            if san:
                moves.append(PgnMove(san=san))

    return moves, result_token


def parse_pgn_game(pgn_text: str) -> ParsedPgn:
    """Parse a single PGN game into structured headers/moves/result.

    Tag pairs are read until the first movetext line; ``%`` escape lines are
    ignored.  When the movetext carries no result token the ``Result`` tag is
    used instead.
    """
    headers: dict[str, str] = {}
    movetext_lines: list[str] = []

    for line in (raw.strip() for raw in pgn_text.splitlines()):
        if not movetext_lines and line.startswith("["):
            key, value = _parse_tag_pair(line)
            headers[key] = value
        elif line and not line.startswith("%"):
            movetext_lines.append(line)

    moves, result_token = _parse_movetext("\n".join(movetext_lines))
    if result_token == "*" and headers.get("Result") in _RESULT_BY_TOKEN:
        result_token = headers["Result"]

    return ParsedPgn(headers=headers, moves=moves, result_token=result_token)


def parse_pgn(pgn_text: str) -> tuple[dict[str, str], list[str], str]:
    """Parse PGN text into headers, SAN mainline and result token."""
    parsed = parse_pgn_game(pgn_text)
    return parsed.headers, [move.san for move in parsed.moves], parsed.result_token
