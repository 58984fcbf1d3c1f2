"""
Pricing and Customization Resolver

Turns a menu item plus the customer's choices into a cart line with the
final price and the tags the kitchen reads.

    >>> line = resolve_line(pf_frango, ["Feijão", "Salada"], ["Batata Frita"])
    >>> line.price, line.details
    (28.0, ['S/ Arroz', '+ Batata Frita'])

No storage access, no side effects. The Cart collects lines before the
order is sent to the ledger.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from comanda.core.exceptions import ValidationError
from comanda.entities import MenuItem

logger = logging.getLogger(__name__)

MARMITEX_TAG = "📦 MARMITEX"
COMPLETE_TAG = "Completa"
NO_SIDES_TAG = "Sem acompanhamentos"
REMOVED_PREFIX = "S/ "
EXTRA_PREFIX = "+ "


@dataclass
class CartLine:
    """A line waiting to be ordered. price is final, extras included."""
    name: str
    price: float
    details: list[str] = field(default_factory=list)
    observation: Optional[str] = None
    is_marmitex: bool = False
    quantity: int = 1

    @property
    def line_total(self) -> float:
        return round(self.price * self.quantity, 2)

    @property
    def is_plain(self) -> bool:
        """No tags and no note, so identical units can share the line."""
        return not self.details and not self.observation


def _unique(values: Iterable[str]) -> list[str]:
    seen = []
    for value in values:
        if value not in seen:
            seen.append(value)
    return seen


def describe_sides(item_sides: list[str], selected_sides: Iterable[str]) -> str:
    """Tag summarizing which accompaniments stay on the plate."""
    selected = set(selected_sides)
    removed = [side for side in item_sides if side not in selected]
    if not removed:
        return COMPLETE_TAG
    if len(removed) == len(item_sides):
        return NO_SIDES_TAG
    return REMOVED_PREFIX + ", ".join(removed)


def resolve_line(
    item: MenuItem,
    selected_sides: Iterable[str] = (),
    selected_extras: Iterable[str] = (),
    is_marmitex: bool = False,
    observation: Optional[str] = None,
    quantity: int = 1,
) -> CartLine:
    """
    Compute the final price and detail tags for a customized dish.

    Args:
        item: Menu item being ordered
        selected_sides: Sides the customer kept
        selected_extras: Extra names in the order they were picked
        is_marmitex: Takeaway packaging
        observation: Free-text note for the kitchen
        quantity: Units, at least 1

    Returns:
        CartLine: Frozen line ready for the ledger

    Note:
        An extra name the item does not offer adds nothing to the price
        but is still listed in the details.
    """
    if quantity < 1:
        raise ValidationError("Quantity must be at least 1", field="quantity")

    extras = _unique(selected_extras)
    price = item.price + sum(item.extra_price(name) for name in extras)

    details = []
    if is_marmitex:
        details.append(MARMITEX_TAG)
    details.append(describe_sides(list(item.sides), selected_sides))
    details.extend(EXTRA_PREFIX + name for name in extras)

    note = observation.strip() if observation else ""

    return CartLine(
        name=item.name,
        price=round(price, 2),
        details=details,
        observation=note or None,
        is_marmitex=is_marmitex,
        quantity=quantity,
    )


class Cart:
    """
    Lines collected on the ordering screen.

    Plain items (drinks, porções) that are added twice share one line
    with quantity 2. Customized dishes always get a line of their own.
    """

    def __init__(self):
        self.lines: list[CartLine] = []

    def __len__(self) -> int:
        return len(self.lines)

    @property
    def total(self) -> float:
        return round(sum(line.price * line.quantity for line in self.lines), 2)

    def add(self, item: MenuItem) -> CartLine:
        """
        Add one unit of item without customization.

        Dishes with sides go in "Completa".
        """
        if item.is_customizable:
            return self.add_customized(item, selected_sides=item.sides)

        for line in self.lines:
            if line.name == item.name and line.is_plain:
                line.quantity += 1
                logger.debug(f"Cart: {item.name} x{line.quantity}")
                return line

        line = CartLine(name=item.name, price=item.price)
        self.lines.append(line)
        return line

    def add_customized(
        self,
        item: MenuItem,
        selected_sides: Iterable[str] = (),
        selected_extras: Iterable[str] = (),
        is_marmitex: bool = False,
        observation: Optional[str] = None,
    ) -> CartLine:
        """Append a new line resolved by resolve_line."""
        line = resolve_line(
            item,
            selected_sides=selected_sides,
            selected_extras=selected_extras,
            is_marmitex=is_marmitex,
            observation=observation,
        )
        self.lines.append(line)
        return line

    def change_quantity(self, index: int, delta: int) -> None:
        """Add delta units to a line; the line goes away at zero."""
        line = self.lines[index]
        quantity = line.quantity + delta
        if quantity <= 0:
            del self.lines[index]
        else:
            line.quantity = quantity

    def remove(self, index: int) -> None:
        del self.lines[index]

    def clear(self) -> None:
        self.lines = []
