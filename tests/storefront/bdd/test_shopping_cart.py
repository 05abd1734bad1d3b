"""BDD tests for the shopping cart."""

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import parsers, scenarios, then, when

scenarios("features/shopping_cart.feature")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('{qty:d} of product "{product_id}" are added to the cart'))
def add_to_cart(cart, qty, product_id, error):
    try:
        cart.add_to_cart(product_id, qty)
    except ValidationError as exc:
        error["exc"] = exc


@when(parsers.cfparse('the quantity of product "{product_id}" is set to {qty:d}'))
def set_quantity(cart, product_id, qty):
    cart.update_quantity(product_id, qty)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart has {count:d} line"))
def cart_has_n_lines(cart, count):
    assert len(cart.items) == count


@then(parsers.cfparse("the cart subtotal is {amount:f}"))
def cart_subtotal_is(cart, amount):
    assert cart.summary().subtotal == pytest.approx(amount)


@then(parsers.cfparse("the shipping cost is {amount:f}"))
def shipping_cost_is(cart, amount):
    assert cart.summary().shipping_cost == pytest.approx(amount)
