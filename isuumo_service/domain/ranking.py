"""
Chair-to-door compatibility
"""
from typing import Tuple

from .models import ChairDimensions
from .predicates import EstateField, Operator, Predicate, PredicateBuilder


def rank(width: int, height: int, depth: int) -> Tuple[int, int, int]:
    """Order three dimensions as (min, mid, max); ties keep their value"""
    smallest = min(width, height, depth)
    largest = max(width, height, depth)
    middle = width + height + depth - smallest - largest
    return smallest, middle, largest


def compatibility_predicate(dimensions: ChairDimensions) -> Predicate:
    """
    Estates whose door lets the chair through.

    The chair can be turned so its longest side goes through the doorway, so
    only its two shortest sides are compared with the door: the smallest
    against the door's narrower side and the middle one against the wider side.
    """
    smallest, middle, _ = rank(dimensions.width, dimensions.height, dimensions.depth)
    return (
        PredicateBuilder()
        .add(EstateField.DOOR_MIN, Operator.GE, smallest)
        .add(EstateField.DOOR_MAX, Operator.GE, middle)
        .build()
    )
