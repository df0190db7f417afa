from datetime import date
from decimal import Decimal

import pytest

from gearshare.domain.errors import NotFoundError, ValidationError
from gearshare.services.cart_service import CartService


@pytest.fixture
def carts(db, clock):
    return CartService(db, clock=clock)


def _line(cart, product_id, option_name=None):
    for item in cart["items"]:
        option = item["selected_option"]
        name = option["name"] if option else None
        if item["product_id"] == product_id and name == option_name:
            return item
    raise AssertionError(f"no line for {product_id}/{option_name}")


def test_empty_cart(carts, customer):
    cart = carts.build_cart(customer.user_id)

    assert cart == {"items": [], "total_amount": 0, "item_count": 0, "line_count": 0}


def test_plain_purchase_line_is_priced_without_rental(carts, customer, make_product):
    product = make_product(price="500000")

    cart = carts.add_or_update(customer.user_id, product.id, quantity=2)

    item = cart["items"][0]
    assert item["product_id"] == product.id
    assert item["product_name"] == "Camera"
    assert item["product_image"] == "camera.jpg"
    assert item["selected_option"] is None
    assert item["rental_days"] == 0
    assert item["rental_extra"] == 0
    assert item["per_unit_total"] == Decimal("500000")
    assert item["line_total"] == Decimal("1000000")
    assert cart["total_amount"] == Decimal("1000000")


def test_rental_line_adds_daily_rate_per_unit(carts, customer, make_product):
    product = make_product(price="2000000")

    # clock is 2026-10-19 10:00 UTC, the return date is three days ahead
    cart = carts.add_or_update(customer.user_id, product.id, quantity=1, return_date=date(2026, 10, 22))

    item = cart["items"][0]
    assert item["daily_rental_rate"] == Decimal("40000")
    assert item["rental_days"] == 3
    assert item["rental_extra"] == Decimal("120000")
    assert item["per_unit_total"] == Decimal("2120000")
    assert item["line_total"] == Decimal("2120000")
    assert cart["total_amount"] == Decimal("2120000")


def test_add_mode_merges_into_single_line(carts, customer, make_product):
    product = make_product()

    carts.add_or_update(customer.user_id, product.id, quantity=2, mode="add")
    cart = carts.add_or_update(customer.user_id, product.id, quantity=2, mode="add")

    assert cart["line_count"] == 1
    assert cart["items"][0]["quantity"] == 4
    assert cart["item_count"] == 4


def test_add_mode_with_non_positive_quantity_adds_one(carts, customer, make_product):
    product = make_product()
    carts.add_or_update(customer.user_id, product.id, quantity=3)

    cart = carts.add_or_update(customer.user_id, product.id, quantity=0, mode="add")

    assert cart["items"][0]["quantity"] == 4


def test_set_mode_overwrites_only_positive_quantities(carts, customer, make_product):
    product = make_product()
    carts.add_or_update(customer.user_id, product.id, quantity=3)

    cart = carts.add_or_update(customer.user_id, product.id, quantity=5)
    assert cart["items"][0]["quantity"] == 5

    cart = carts.add_or_update(customer.user_id, product.id, quantity=0)
    assert cart["items"][0]["quantity"] == 5

    cart = carts.add_or_update(customer.user_id, product.id, quantity=-2)
    assert cart["items"][0]["quantity"] == 5


def test_new_line_gets_at_least_one_unit(carts, customer, make_product):
    product = make_product()

    cart = carts.add_or_update(customer.user_id, product.id, quantity=0)

    assert cart["items"][0]["quantity"] == 1


def test_unknown_mode_behaves_like_set(carts, customer, make_product):
    product = make_product()
    carts.add_or_update(customer.user_id, product.id, quantity=3)

    cart = carts.add_or_update(customer.user_id, product.id, quantity=1, mode="replace")

    assert cart["items"][0]["quantity"] == 1


def test_different_options_are_distinct_lines(carts, customer, make_product):
    product = make_product(price="100000")

    carts.add_or_update(
        customer.user_id, product.id, quantity=1,
        selected_option={"name": "Red", "extra_price": Decimal("10000")},
    )
    cart = carts.add_or_update(
        customer.user_id, product.id, quantity=2,
        selected_option={"name": "Blue", "extra_price": Decimal("20000")},
    )

    assert cart["line_count"] == 2
    red = _line(cart, product.id, "Red")
    blue = _line(cart, product.id, "Blue")
    assert red["per_unit_total"] == Decimal("110000")
    assert red["line_total"] == Decimal("110000")
    assert blue["per_unit_total"] == Decimal("120000")
    assert blue["line_total"] == Decimal("240000")
    assert cart["total_amount"] == Decimal("350000")


def test_option_and_no_option_are_distinct_lines(carts, customer, make_product):
    product = make_product()

    carts.add_or_update(customer.user_id, product.id, quantity=1)
    cart = carts.add_or_update(customer.user_id, product.id, quantity=1, selected_option={"name": "Red"})

    assert cart["line_count"] == 2
    assert _line(cart, product.id, "Red")["selected_option"]["extra_price"] == 0


def test_same_option_keeps_stored_extra_price(carts, customer, make_product):
    product = make_product(price="100000")
    carts.add_or_update(
        customer.user_id, product.id, quantity=1,
        selected_option={"name": "Red", "extra_price": Decimal("10000")},
    )

    cart = carts.add_or_update(
        customer.user_id, product.id, quantity=2,
        selected_option={"name": "Red", "extra_price": Decimal("99999")},
    )

    assert cart["line_count"] == 1
    item = cart["items"][0]
    assert item["quantity"] == 2
    assert item["selected_option"] == {"name": "Red", "extra_price": Decimal("10000")}
    assert item["line_total"] == Decimal("220000")


def test_empty_option_name_means_no_option(carts, customer, make_product):
    product = make_product()

    carts.add_or_update(customer.user_id, product.id, quantity=1, mode="add")
    cart = carts.add_or_update(customer.user_id, product.id, quantity=1, selected_option={"name": ""}, mode="add")

    assert cart["line_count"] == 1
    assert cart["items"][0]["quantity"] == 2
    assert cart["items"][0]["selected_option"] is None


def test_return_date_is_replaced_on_update(carts, customer, make_product):
    product = make_product(price="1000000")
    carts.add_or_update(customer.user_id, product.id, quantity=1, return_date=date(2026, 10, 22))

    cart = carts.add_or_update(customer.user_id, product.id, return_date=date(2026, 10, 25))

    item = cart["items"][0]
    assert item["return_date"] == date(2026, 10, 25)
    assert item["rental_days"] == 6
    assert item["rental_extra"] == Decimal("180000")


def test_return_date_is_kept_when_not_supplied(carts, customer, make_product):
    product = make_product()
    carts.add_or_update(customer.user_id, product.id, quantity=1, return_date=date(2026, 10, 22))

    cart = carts.add_or_update(customer.user_id, product.id, quantity=4)

    assert cart["items"][0]["return_date"] == date(2026, 10, 22)


def test_base_price_is_read_live_from_catalog(db, carts, customer, make_product):
    product = make_product(price="500000")
    carts.add_or_update(customer.user_id, product.id, quantity=1)

    product.price = Decimal("700000")
    db.commit()

    cart = carts.build_cart(customer.user_id)
    assert cart["items"][0]["base_price"] == Decimal("700000")
    assert cart["total_amount"] == Decimal("700000")


def test_deleted_product_degrades_to_zero_priced_line(db, carts, customer, make_product):
    product = make_product(price="500000")
    carts.add_or_update(
        customer.user_id, product.id, quantity=2,
        selected_option={"name": "Kit", "extra_price": Decimal("1000")},
        return_date=date(2026, 10, 22),
    )

    db.delete(product)
    db.commit()

    cart = carts.build_cart(customer.user_id)
    item = cart["items"][0]
    assert item["product_id"] == product.id
    assert item["product_name"] == ""
    assert item["product_image"] == ""
    assert item["base_price"] == 0
    assert item["daily_rental_rate"] == 0
    assert item["line_total"] == Decimal("2000")


def test_add_requires_product_id(carts, customer):
    with pytest.raises(ValidationError):
        carts.add_or_update(customer.user_id, None, quantity=1)


def test_add_unknown_product_fails(carts, customer):
    with pytest.raises(NotFoundError):
        carts.add_or_update(customer.user_id, "does-not-exist", quantity=1)


def test_update_quantity(carts, customer, make_product):
    product = make_product()
    carts.add_or_update(customer.user_id, product.id, quantity=1, selected_option={"name": "Red"})

    cart = carts.update_quantity(customer.user_id, product.id, "Red", 7)
    assert cart["items"][0]["quantity"] == 7

    cart = carts.update_quantity(customer.user_id, product.id, "Red", 0)
    assert cart["items"] == []


def test_update_quantity_errors(carts, customer, make_product):
    product = make_product()
    carts.add_or_update(customer.user_id, product.id, quantity=1)

    with pytest.raises(NotFoundError):
        carts.update_quantity(customer.user_id, product.id, "Red", 2)
    with pytest.raises(ValidationError):
        carts.update_quantity(customer.user_id, product.id, None, -1)


def test_remove_single_line(carts, customer, make_product):
    product = make_product()
    carts.add_or_update(customer.user_id, product.id, quantity=1)
    carts.add_or_update(customer.user_id, product.id, quantity=1, selected_option={"name": "Red"})

    cart = carts.remove(customer.user_id, product.id, None)

    assert cart["line_count"] == 1
    assert cart["items"][0]["selected_option"]["name"] == "Red"


def test_remove_missing_line_fails(carts, customer, make_product):
    product = make_product()

    with pytest.raises(NotFoundError):
        carts.remove(customer.user_id, product.id, None)

    carts.add_or_update(customer.user_id, product.id, quantity=1)
    with pytest.raises(NotFoundError):
        carts.remove(customer.user_id, product.id, "Red")


def test_clear_is_idempotent(carts, customer, make_product):
    carts.add_or_update(customer.user_id, make_product().id, quantity=2)
    carts.add_or_update(customer.user_id, make_product(name="Tripod").id, quantity=1)

    first = carts.clear(customer.user_id)
    second = carts.clear(customer.user_id)

    assert first == second == {"items": [], "total_amount": 0, "item_count": 0, "line_count": 0}


def test_carts_are_per_user(carts, customer, other_customer, make_product):
    product = make_product()
    carts.add_or_update(customer.user_id, product.id, quantity=3)

    carts.clear(other_customer.user_id)

    assert carts.build_cart(customer.user_id)["item_count"] == 3
    assert carts.build_cart(other_customer.user_id)["items"] == []
