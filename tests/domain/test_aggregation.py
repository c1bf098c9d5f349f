from __future__ import annotations

from decimal import Decimal

from woosync.domain.aggregation import (
    AggregatedShippingLabelOrderItems,
    AggregateOrderItem,
    combine_aggregated_order_items,
    combine_order_items,
    combine_refunded_products,
    refunded_products_count,
)
from tests.helpers.samples import (
    make_item,
    make_label,
    make_product,
    make_refund,
    make_refunded_item,
    make_variation,
)

HOODIE = make_item(890, 52, 2, 30, variation_id=1201, name="Hoodie")
BEANIE = make_item(891, 61, 3, 10, name="Beanie")


def _quantities(items: list[AggregateOrderItem]) -> list[tuple[str, Decimal, Decimal]]:
    return [(item.name, item.quantity, item.total) for item in items]


def test_refunds_reduce_matching_items() -> None:
    refunds = [
        make_refund(622, make_refunded_item(61, 1, 10, refunded_item_id=891)),
        make_refund(623, make_refunded_item(52, 1, 30, variation_id=1201)),
    ]

    combined = combine_order_items([HOODIE, BEANIE], refunds)

    assert _quantities(combined) == [
        ("Hoodie", Decimal(1), Decimal(30)),
        ("Beanie", Decimal(2), Decimal(20)),
    ]
    assert combined[0].item_id == 890


def test_fully_refunded_items_are_dropped() -> None:
    refunds = [make_refund(622, make_refunded_item(52, 2, 30, variation_id=1201))]

    combined = combine_order_items([HOODIE, BEANIE], refunds)

    assert [item.name for item in combined] == ["Beanie"]


def test_refund_spreads_over_items_of_same_product_without_going_negative() -> None:
    first = make_item(1, 61, 1, 10)
    second = make_item(2, 61, 1, 10)
    refunds = [make_refund(622, make_refunded_item(61, 3, 10))]

    assert combine_order_items([first, second], refunds) == []


def test_refund_referencing_an_item_only_touches_that_item() -> None:
    first = make_item(1, 61, 2, 10)
    second = make_item(2, 61, 2, 10)
    refunds = [make_refund(622, make_refunded_item(61, 1, 10, refunded_item_id=2))]

    combined = combine_order_items([first, second], refunds)

    assert [(item.item_id, item.quantity) for item in combined] == [
        (1, Decimal(2)),
        (2, Decimal(1)),
    ]


def test_refunded_products_are_grouped_with_absolute_values() -> None:
    refunds = [
        make_refund(622, make_refunded_item(61, 1, 10, name="Beanie")),
        make_refund(623, make_refunded_item(61, 2, 10, name="Beanie")),
        make_refund(624, make_refunded_item(52, 1, 30, variation_id=1201, name="Hoodie")),
    ]

    grouped = combine_refunded_products(refunds)

    assert _quantities(grouped) == [
        ("Beanie", Decimal(3), Decimal(30)),
        ("Hoodie", Decimal(1), Decimal(30)),
    ]
    assert grouped[0].price == Decimal(10)
    assert refunded_products_count(refunds) == Decimal(4)


def test_refunded_products_count_without_refunds() -> None:
    assert refunded_products_count([]) == Decimal(0)


def test_label_items_are_subtracted_once() -> None:
    items = combine_order_items([HOODIE, BEANIE], [])
    packed = [items[1].with_quantity(Decimal(1)), items[0].with_quantity(Decimal(5))]

    combined = combine_aggregated_order_items(items, packed)

    assert _quantities(combined) == [("Beanie", Decimal(2), Decimal(20))]


def test_label_products_resolve_to_order_items() -> None:
    label = make_label(1825, (1201, 61, 61), product_names=("Hoodie - Blue", "Beanie", "Beanie"))

    resolved = AggregatedShippingLabelOrderItems([label], [HOODIE, BEANIE])

    assert _quantities(resolved.order_items(label)) == [
        ("Hoodie", Decimal(1), Decimal(30)),
        ("Beanie", Decimal(2), Decimal(20)),
    ]
    assert resolved.order_items(label)[0].variation_id == 1201
    assert resolved.order_item(label, 1) is not None
    assert resolved.order_item(label, 1).name == "Beanie"  # type: ignore[union-attr]
    assert resolved.order_item(label, 2) is None


def test_label_products_fall_back_to_catalog_then_label_name() -> None:
    label = make_label(1825, (1202, 70, 99), product_names=("Hoodie - Green", "Cap", "Mystery"))

    resolved = AggregatedShippingLabelOrderItems(
        [label],
        [],
        products=[make_product(70, "Cap")],
        product_variations=[make_variation(52, 1202, "35")],
    ).order_items(label)

    variation, product, unknown = resolved
    assert (variation.product_id, variation.variation_id, variation.name) == (
        52,
        1202,
        "Hoodie - Green",
    )
    assert variation.price == Decimal(35)
    assert (product.name, product.price) == ("Cap", Decimal(0))
    assert (unknown.product_id, unknown.name) == (99, "Mystery")


def test_refunded_labels_do_not_claim_items() -> None:
    kept = make_label(1825, (61,))
    refunded = make_label(1824, (1201,), refunded=True)

    resolved = AggregatedShippingLabelOrderItems([kept, refunded], [HOODIE, BEANIE])

    items = resolved.order_items_of_non_refunded_shipping_labels([kept, refunded])
    assert [item.name for item in items] == ["Beanie"]
