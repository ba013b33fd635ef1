
"""Piece randomizers: uniform independent draws and a 7-bag"""
import random
from typing import List, Optional
from tetris_piece import Kind


class UniformRandom:
    PIECES = list(Kind)

    def __init__(self, seed: Optional[int] = None):
        self.rng = random.Random(seed)

    def next_piece(self) -> Kind:
        return self.rng.choice(self.PIECES)


class SevenBag(UniformRandom):
    """Deals every kind once per shuffled bag, so droughts never exceed 12 pieces."""
    def __init__(self, seed: Optional[int] = None):
        super().__init__(seed)
        self.bag: List[Kind] = []

    def next_piece(self) -> Kind:
        if not self.bag:
            self.bag = self.PIECES[:]
            self.rng.shuffle(self.bag)
        return self.bag.pop()


def make_randomizer(seed: Optional[int] = None, seven_bag: bool = False):
    return SevenBag(seed) if seven_bag else UniformRandom(seed)
