"""Explicit game trees.

A ``Node`` is a position whose successors are listed up front. It is handy for
hand-built examples and, through ``random_tree``, for checking the alpha-beta
core against the brute-force reference on many random shapes.
"""

from __future__ import annotations

import random
from dataclasses import dataclass


@dataclass(frozen=True)
class Node:
    """A node of an explicit game tree.

    Attributes:
        player: Player to move at this node (``True`` or ``False``).
        fitness: Value of this node from the ``True`` player's perspective.
            The ``False`` player sees the negated value.
        children: Successor nodes; a move is the index of a child.
    """

    player: bool = True
    fitness: int = 0
    children: tuple[Node, ...] = ()

    @classmethod
    def root(cls, *children: Node, player: bool = True) -> Node:
        return cls(player=player, fitness=0, children=tuple(children))

    def with_children(self, *children: Node) -> Node:
        return Node(player=self.player, fitness=self.fitness, children=tuple(children))

    def size(self) -> int:
        """Number of nodes in this subtree."""
        return 1 + sum(child.size() for child in self.children)

    # Game protocol

    def active_player(self) -> bool:
        return self.player

    def legal_moves(self) -> range:
        return range(len(self.children))

    def apply(self, move: int) -> Node:
        return self.children[move]

    def evaluate(self, perspective: bool) -> int:
        return self.fitness if perspective else -self.fitness


def random_tree(seed: int, size: int, fitness_range: int = 16) -> Node:
    """Build a random tree with ``size`` nodes besides the root.

    Each new node is attached by walking down from the root and stopping at a
    random point, so both wide and deep shapes occur. Players are drawn at
    random as well, which means consecutive plies may belong to the same
    player.

    Args:
        seed: Seed for ``random.Random``.
        size: Number of nodes to add below the root.
        fitness_range: Fitness values are drawn from ``[-range, range]``.
    """
    rng = random.Random(seed)
    # Mutable scaffold first, frozen Nodes last.
    scaffold: list = [True, 0, []]

    for _ in range(size):
        node = scaffold
        while True:
            next_index = rng.randrange(len(node[2]) + 1)
            if next_index == len(node[2]):
                break
            node = node[2][next_index]
        node[2].append([rng.random() < 0.5, rng.randint(-fitness_range, fitness_range), []])

    def freeze(entry: list) -> Node:
        player, fitness, children = entry
        return Node(player=player, fitness=fitness, children=tuple(freeze(c) for c in children))

    return freeze(scaffold)
