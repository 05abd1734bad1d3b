"""Shared BDD fixtures and step definitions for the storefront."""

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then
from storefront.cart.engine import CartEngine
from storefront.order.store import OrderStore


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an empty cart", target_fixture="cart")
def empty_cart(catalogue):
    return CartEngine(catalogue)


@given("an empty order store", target_fixture="orders")
def empty_order_store():
    return OrderStore()


@given(parsers.cfparse('the cart holds {qty:d} of product "{product_id}"'), target_fixture="cart")
def cart_holding(cart, qty, product_id):
    cart.add_to_cart(product_id, qty)
    return cart


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the cart is empty")
def cart_is_empty(cart):
    assert cart.is_empty
    assert cart.total_items == 0


@then(parsers.cfparse('the cart holds {qty:d} of product "{product_id}"'))
def cart_holds(cart, qty, product_id):
    assert cart.quantity_of(product_id) == qty


@then("the cart action fails with a validation error")
def cart_action_fails(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)
