"""Checkout form validation.

Every field is checked and all problems are reported together, keyed by
field name, so the shopper can fix the whole form in one pass.
"""

from dataclasses import dataclass, fields

from protean.exceptions import ValidationError

from storefront.order.order import Customer, ShippingAddress
from storefront.shared.contact import is_valid_email, is_valid_phone, is_valid_zip

DEFAULT_COUNTRY = "USA"

_REQUIRED_MESSAGES = {
    "first_name": "First name is required",
    "last_name": "Last name is required",
    "email": "Email is required",
    "phone": "Phone number is required",
    "street": "Street address is required",
    "city": "City is required",
    "state": "State is required",
    "zip_code": "ZIP code is required",
}

_FORMAT_CHECKS = {
    "email": (is_valid_email, "Please enter a valid email address"),
    "phone": (is_valid_phone, "Please enter a valid phone number"),
    "zip_code": (is_valid_zip, "Please enter a valid ZIP code"),
}


@dataclass(frozen=True)
class CheckoutForm:
    """Contact and shipping details as typed into the checkout form."""

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    street: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = DEFAULT_COUNTRY

    @classmethod
    def from_mapping(cls, data) -> "CheckoutForm":
        """Build a form from request data; unknown keys are ignored and values are read as text."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: str(value) for key, value in data.items() if key in known and value is not None})


def form_errors(form: CheckoutForm) -> dict:
    """Return ``{field: [message]}`` for every invalid field; empty when the form is valid."""
    errors = {}
    for field_name, message in _REQUIRED_MESSAGES.items():
        value = getattr(form, field_name) or ""
        if not value.strip():
            errors[field_name] = [message]
            continue

        check = _FORMAT_CHECKS.get(field_name)
        if check and not check[0](value):
            errors[field_name] = [check[1]]

    return errors


def validate_checkout_form(form) -> tuple[Customer, ShippingAddress]:
    """Validate the checkout form and build the order's customer and address.

    Args:
        form: A ``CheckoutForm`` or a mapping with the same keys.

    Raises:
        ValidationError: listing every invalid field.
    """
    if not isinstance(form, CheckoutForm):
        form = CheckoutForm.from_mapping(form)

    errors = form_errors(form)
    if errors:
        raise ValidationError(errors)

    customer = Customer(
        first_name=form.first_name.strip(),
        last_name=form.last_name.strip(),
        email=form.email,
        phone=form.phone,
    )
    address = ShippingAddress(
        street=form.street.strip(),
        city=form.city.strip(),
        state=form.state.strip(),
        zip_code=form.zip_code,
        country=(form.country or "").strip() or DEFAULT_COUNTRY,
    )
    return customer, address
