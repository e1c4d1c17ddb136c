"""Positions implementing the ``Game`` protocol."""

from plysearch.games.chess import ChessPosition
from plysearch.games.flags import Flags
from plysearch.games.tic_tac_toe import Mark, TicTacToe
from plysearch.games.tree import Node, random_tree

__all__ = [
    "ChessPosition",
    "Flags",
    "Mark",
    "Node",
    "TicTacToe",
    "random_tree",
]
