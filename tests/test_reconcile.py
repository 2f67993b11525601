"""Unit tests for cart reconciliation."""

import pytest

from app.domain.errors import ValidationFailure
from app.domain.reconcile import reconcile


def apply(changes, cart):
    result = dict(cart)
    for product_id, quantity in changes.creates + changes.updates:
        result[product_id] = quantity
    for product_id in changes.deletes:
        result.pop(product_id, None)
    return result


class TestReconcile:
    def test_delete_and_create(self):
        changes = reconcile([("A", 0), ("C", 3)], {"A": 2, "B": 1})

        assert changes.deletes == ["A"]
        assert changes.creates == [("C", 3)]
        assert changes.updates == []

    def test_changed_quantity_is_update(self):
        changes = reconcile([(1, 5)], {1: 2})

        assert changes.updates == [(1, 5)]
        assert changes.creates == []
        assert changes.deletes == []

    def test_unchanged_quantity_is_noop(self):
        changes = reconcile([(1, 2)], {1: 2})

        assert changes.is_empty()

    def test_zero_for_missing_product_is_noop(self):
        changes = reconcile([(7, 0)], {1: 2})

        assert changes.is_empty()

    def test_products_not_mentioned_are_untouched(self):
        changes = reconcile([(2, 4)], {1: 3, 3: 1})

        assert changes.creates == [(2, 4)]
        assert changes.deletes == []
        assert changes.updates == []

    def test_empty_desired_list(self):
        assert reconcile([], {1: 1}).is_empty()

    def test_last_duplicate_wins(self):
        changes = reconcile([(1, 3), (1, 0)], {1: 2})

        assert changes.deletes == [1]
        assert changes.updates == []

    def test_negative_quantity_rejected(self):
        with pytest.raises(ValidationFailure):
            reconcile([(1, -1)], {1: 2})


@pytest.mark.parametrize(
    "desired, current",
    [
        ([(1, 0), (2, 0), (3, 0)], {1: 1, 2: 5}),
        ([(1, 2), (2, 0), (4, 1)], {1: 1, 2: 5, 3: 2}),
        ([(9, 9)], {}),
        ([(1, 1), (2, 2)], {1: 1, 2: 2}),
    ],
)
class TestReconcileProperties:
    def test_zero_quantity_never_created_or_updated(self, desired, current):
        changes = reconcile(desired, current)
        zeroed = {pid for pid, qty in desired if qty == 0}

        assert not zeroed & {pid for pid, _ in changes.creates}
        assert not zeroed & {pid for pid, _ in changes.updates}
        assert set(changes.deletes) == zeroed & set(current)

    def test_converges_after_one_pass(self, desired, current):
        result = apply(reconcile(desired, current), current)

        assert reconcile(desired, result).is_empty()
