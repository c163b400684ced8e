from itertools import permutations

import pytest

from isuumo_service.domain.models import ChairDimensions
from isuumo_service.domain.predicates import Comparison, EstateField, Operator
from isuumo_service.domain.ranking import compatibility_predicate, rank
from tests.fakes import make_estate


@pytest.mark.parametrize("dims, expected", [
    ((5, 5, 5), (5, 5, 5)),
    ((3, 7, 5), (3, 5, 7)),
    ((1, 1, 9), (1, 1, 9)),
])
def test_rank_known_dimensions(dims, expected):
    assert rank(*dims) == expected


@pytest.mark.parametrize("values", [(1, 2, 3), (2, 2, 3), (2, 3, 3), (4, 4, 4), (10, 1, 10)])
def test_rank_matches_sorted_for_every_permutation(values):
    for dims in permutations(values):
        assert rank(*dims) == tuple(sorted(dims))


def test_compatibility_predicate_checks_two_smallest_sides():
    predicate = compatibility_predicate(ChairDimensions(width=120, height=60, depth=90))

    assert predicate.comparisons == (
        Comparison(EstateField.DOOR_MIN, Operator.GE, 60),
        Comparison(EstateField.DOOR_MAX, Operator.GE, 90),
    )


def test_compatibility_predicate_against_doors():
    predicate = compatibility_predicate(ChairDimensions(width=120, height=60, depth=90))

    assert predicate.matches(make_estate(1, door_height=60, door_width=90))
    assert predicate.matches(make_estate(2, door_height=100, door_width=70))
    assert not predicate.matches(make_estate(3, door_height=59, door_width=200))
    assert not predicate.matches(make_estate(4, door_height=89, door_width=80))
