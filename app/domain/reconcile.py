# app/domain/reconcile.py
from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Tuple

from app.domain.errors import ValidationFailure


@dataclass
class CartChanges:
    """
    Wynik porownania koszyka z lista od klienta.
    creates/updates: (product_id, quantity), deletes: product_id
    """

    creates: List[Tuple[int, int]] = field(default_factory=list)
    updates: List[Tuple[int, int]] = field(default_factory=list)
    deletes: List[int] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.creates or self.updates or self.deletes)


def reconcile(
    desired_items: Iterable[Tuple[int, int]],
    current_items: Mapping[int, int],
) -> CartChanges:
    """
    Wylicza minimalny zestaw zmian dla koszyka.

    Dziala tylko na produktach wymienionych w desired_items, reszta koszyka
    zostaje bez zmian. Ilosc 0 oznacza usuniecie, a dla produktu ktorego nie
    ma w koszyku jest ignorowana. Przy powtorzonym product_id wygrywa ostatni wpis.
    """
    #ostatni wpis wygrywa, kolejnosc pierwszego wystapienia zachowana
    desired: dict[int, int] = {}
    for product_id, quantity in desired_items:
        if quantity < 0:
            raise ValidationFailure(f"Quantity for product {product_id} must not be negative")
        desired[product_id] = quantity

    changes = CartChanges()

    for product_id, quantity in desired.items():
        current = current_items.get(product_id)

        if current is None:
            if quantity > 0:
                changes.creates.append((product_id, quantity))
        elif quantity == 0:
            changes.deletes.append(product_id)
        elif quantity != current:
            changes.updates.append((product_id, quantity))

    return changes
