import pytest

from buyway.shared.core.configuration import CheckoutConfig
from buyway.shared.core.errors import CheckoutValidationError
from buyway.shared.domain.checkout.service import AddressForm, CheckoutService
from buyway.shared.domain.models import OrderStatus, PaymentMethod, SettingsPatch
from buyway.shared.domain.stores import CartStore, OrderStore, SettingsStore


@pytest.fixture
def address():
    return AddressForm(
        house_no="12B",
        area="MG Road",
        landmark="Near City Park",
        city="Pune",
        state="Maharashtra",
        pincode="411001",
    )


@pytest.fixture
def checkout(backing, clock):
    return CheckoutService(CartStore(backing), OrderStore(clock=clock), SettingsStore())


def test_address_format_with_and_without_landmark(address):
    assert address.format() == "12B, MG Road, Near City Park, Pune, Maharashtra - 411001"

    address.landmark = ""
    assert address.format() == "12B, MG Road, Pune, Maharashtra - 411001"


@pytest.mark.parametrize("field", ["house_no", "area", "city", "state", "pincode"])
def test_missing_required_field_is_rejected(checkout, address, field):
    setattr(address, field, "")

    with pytest.raises(CheckoutValidationError) as excinfo:
        checkout.validate_address(address)

    assert excinfo.value.message == "Please fill all required address fields"
    assert excinfo.value.field == field


def test_pincode_must_have_six_digits(checkout, address):
    address.pincode = "4110"

    with pytest.raises(CheckoutValidationError, match="valid 6-digit Pincode"):
        checkout.validate_address(address)


def test_landmark_is_optional(checkout, address):
    address.landmark = ""

    checkout.validate_address(address)


def test_unknown_payment_method_is_rejected(checkout):
    with pytest.raises(CheckoutValidationError, match="UPI, Card, COD"):
        checkout.validate_payment_method("Cheque")

    assert checkout.validate_payment_method("COD") is PaymentMethod.COD


def test_size_is_required_for_sized_products(checkout, shirt):
    with pytest.raises(CheckoutValidationError, match="select a size"):
        checkout.require_size(shirt, None)

    checkout.require_size(shirt, "M")
    checkout.require_size(shirt.model_copy(update={"sizes": None}), None)


def test_place_order_records_order_then_clears_cart(checkout, address, shirt, polo):
    checkout.cart.add_to_cart(shirt, "M")
    checkout.cart.add_to_cart(shirt, "M")
    checkout.cart.add_to_cart(polo, "2-3Y")

    order = checkout.place_order(address, "Card")

    assert order.total_amount == 3097
    assert order.address == "12B, MG Road, Near City Park, Pune, Maharashtra - 411001"
    assert order.payment_method is PaymentMethod.CARD
    assert order.status is OrderStatus.PROCESSING
    assert [(i.id, i.selected_size, i.quantity) for i in order.items] == [("1", "M", 2), ("3", "2-3Y", 1)]
    assert checkout.cart.get_all() == []
    assert checkout.orders.get_all()[0].id == order.id


def test_order_survives_later_cart_activity(checkout, address, shirt):
    checkout.cart.add_to_cart(shirt, "M")
    order = checkout.place_order(address, "UPI")

    checkout.cart.add_to_cart(shirt, "M")
    checkout.cart.add_to_cart(shirt, "M")

    assert checkout.orders.get_by_id(order.id).items[0].quantity == 1


def test_empty_cart_cannot_be_ordered(checkout, address):
    with pytest.raises(CheckoutValidationError, match="cart is empty"):
        checkout.place_order(address, "UPI")

    assert checkout.orders.get_all() == []


def test_invalid_form_leaves_stores_untouched(checkout, address, shirt):
    checkout.cart.add_to_cart(shirt, "M")
    address.pincode = "12"

    with pytest.raises(CheckoutValidationError):
        checkout.place_order(address, "UPI")

    assert len(checkout.cart.get_all()) == 1
    assert checkout.orders.get_all() == []


def test_delivery_fee_below_free_shipping_threshold(backing, clock, address, polo):
    checkout = CheckoutService(
        CartStore(backing),
        OrderStore(clock=clock),
        SettingsStore(),
        CheckoutConfig(flat_delivery_fee=49),
    )
    checkout.cart.add_to_cart(polo, "2-3Y")

    assert checkout.delivery_fee(499) == 49
    assert checkout.delivery_fee(999) == 0
    assert checkout.order_total() == 548

    checkout.settings.update_settings(SettingsPatch(free_shipping_threshold=0))
    assert checkout.order_total() == 499
