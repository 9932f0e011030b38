"""Rules engine backed by the python-chess library."""

from __future__ import annotations

import logging

import chess

from chess3d.core.coords import EngineCoord
from chess3d.core.enums import GameStatus, PieceKind, Side
from chess3d.core.piece import PlacedPiece
from chess3d.engine.interfaces import IllegalMoveError, IRulesEngine

_LOGGER = logging.getLogger(__name__)

# python-chess piece types share the PAWN=1 .. KING=6 numbering.
_KIND_FROM_CHESS: dict[chess.PieceType, PieceKind] = {
    chess.PAWN: PieceKind.PAWN,
    chess.KNIGHT: PieceKind.KNIGHT,
    chess.BISHOP: PieceKind.BISHOP,
    chess.ROOK: PieceKind.ROOK,
    chess.QUEEN: PieceKind.QUEEN,
    chess.KING: PieceKind.KING,
}
_KIND_TO_CHESS: dict[PieceKind, chess.PieceType] = {
    v: k for k, v in _KIND_FROM_CHESS.items()
}


class PythonChessEngine(IRulesEngine):
    """Adapter exposing a :class:`chess.Board` through :class:`IRulesEngine`.

    Args:
        fen: Optional starting position; the standard one when omitted.
            :meth:`reset` always returns to the standard position.
    """

    __slots__ = ("_board",)

    def __init__(self, fen: str | None = None) -> None:
        self._board = chess.Board(fen) if fen is not None else chess.Board()

    # ── IRulesEngine impl ────────────────────────────────────────────────

    def piece_at(self, x: int, y: int) -> PlacedPiece | None:
        piece = self._board.piece_at(chess.square(x, y))
        if piece is None:
            return None
        side = Side.WHITE if piece.color == chess.WHITE else Side.BLACK
        return PlacedPiece(_KIND_FROM_CHESS[piece.piece_type], side)

    def legal_destinations(self, x: int, y: int) -> set[EngineCoord]:
        origin = chess.square(x, y)
        return {
            (chess.square_file(move.to_square), chess.square_rank(move.to_square))
            for move in self._board.legal_moves
            if move.from_square == origin
        }

    def commit_move(
        self,
        from_x: int,
        from_y: int,
        to_x: int,
        to_y: int,
        promotion: PieceKind | None = None,
    ) -> None:
        move = chess.Move(
            chess.square(from_x, from_y),
            chess.square(to_x, to_y),
            promotion=_KIND_TO_CHESS[promotion] if promotion is not None else None,
        )
        if not self._board.is_legal(move):
            raise IllegalMoveError(
                f"Illegal move: {move.uci()}",
                from_xy=(from_x, from_y),
                to_xy=(to_x, to_y),
            )
        self._board.push(move)
        _LOGGER.debug("Engine applied %s", move.uci())

    def status(self) -> GameStatus:
        board = self._board
        if board.is_checkmate():
            return GameStatus.CHECKMATE
        if board.is_stalemate():
            return GameStatus.STALEMATE
        if board.is_check():
            return GameStatus.CHECK
        return GameStatus.IN_PROGRESS

    def side_to_move(self) -> Side:
        return Side.WHITE if self._board.turn == chess.WHITE else Side.BLACK

    def reset(self) -> None:
        self._board.reset()
