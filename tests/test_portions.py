import math

import pytest
from hypothesis import given, strategies as st

from restaurant.domain.portions import RecipeDataError, RecipeLine, calculate_portions


def test_scarcest_ingredient_bounds_the_result():
    lines = [RecipeLine("flour", 0.2), RecipeLine("egg", 2)]
    assert calculate_portions(lines, {"flour": 1.0, "egg": 10}) == 5


def test_result_is_floored():
    lines = [RecipeLine("flour", 0.3), RecipeLine("egg", 2)]
    assert calculate_portions(lines, {"flour": 1.0, "egg": 10}) == 3


def test_decimal_inputs_divide_exactly():
    assert calculate_portions([RecipeLine("salt", 0.1)], {"salt": 0.3}) == 3


def test_missing_stock_counts_as_zero():
    lines = [RecipeLine("flour", 0.2), RecipeLine("egg", 2)]
    assert calculate_portions(lines, {"flour": 1.0}) == 0


def test_empty_recipe_gives_zero():
    assert calculate_portions([], {"flour": 10}) == 0


@pytest.mark.parametrize("qty", [0, -1, -0.5])
def test_non_positive_quantity_raises(qty):
    lines = [RecipeLine("flour", 0.2), RecipeLine("egg", qty)]
    with pytest.raises(RecipeDataError):
        calculate_portions(lines, {"flour": 1.0, "egg": 10})


def test_negative_stock_raises():
    with pytest.raises(RecipeDataError):
        calculate_portions([RecipeLine("egg", 1)], {"egg": -1})


@pytest.mark.parametrize("qty, stock", [(1, math.inf), (math.inf, 10), (1, math.nan), (math.nan, 10)])
def test_non_finite_amounts_raise(qty, stock):
    with pytest.raises(RecipeDataError):
        calculate_portions([RecipeLine("egg", qty)], {"egg": stock})


positive_qty = st.integers(min_value=1, max_value=1000)
stock_amount = st.integers(min_value=0, max_value=100000)


@given(positive_qty, stock_amount)
def test_single_ingredient_is_floor_division(qty, stock):
    assert calculate_portions([RecipeLine("a", qty)], {"a": stock}) == stock // qty


@given(st.lists(st.tuples(positive_qty, stock_amount), min_size=1, max_size=6))
def test_multi_ingredient_is_min_of_floors(pairs):
    lines = [RecipeLine(f"i{n}", qty) for n, (qty, _) in enumerate(pairs)]
    stock = {f"i{n}": amount for n, (_, amount) in enumerate(pairs)}
    expected = min(amount // qty for qty, amount in pairs)
    assert calculate_portions(lines, stock) == expected


@given(st.lists(st.tuples(positive_qty, stock_amount), min_size=1, max_size=6))
def test_result_is_feasible_and_idempotent(pairs):
    lines = [RecipeLine(f"i{n}", qty) for n, (qty, _) in enumerate(pairs)]
    stock = {f"i{n}": amount for n, (_, amount) in enumerate(pairs)}
    first = calculate_portions(lines, stock)
    assert first == calculate_portions(lines, stock)
    assert first >= 0
    for line in lines:
        assert first * line.quantity <= stock[line.ingredient_id]
    # One more portion must exceed at least one ingredient
    assert any((first + 1) * line.quantity > stock[line.ingredient_id] for line in lines)
    assert isinstance(first, int) and first == math.floor(first)
