"""
Payment selection.

Decides which of a debtor's assets settle a debt. Banked assets are always
spent before anything on the table, buildings before the properties under
them, and properties that would break a complete set are spent last.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from monopoly_deal.cards import BuildingCard, Card
from monopoly_deal.sets import is_in_complete_set


def total_value(cards: Sequence[Card]) -> int:
    return sum(card.value for card in cards)


def find_exact_subset(pool: Sequence[Card], target: int) -> Optional[List[Card]]:
    """
    Subset-sum search for cards adding up to exactly `target`.

    Cards are considered from the most valuable down and the first way a sum
    is reached is kept, so larger cards win ties.

    Returns:
        The matching cards, or None when no subset hits the target.
    """
    if target <= 0:
        return []

    ordered = sorted(pool, key=lambda c: c.value, reverse=True)
    # sum -> (index of the card that reached it, previous sum)
    reached: Dict[int, Tuple[int, int]] = {0: (-1, 0)}

    for index, card in enumerate(ordered):
        if card.value <= 0:
            continue
        for subtotal in sorted(reached, reverse=True):
            new_total = subtotal + card.value
            if new_total <= target and new_total not in reached:
                reached[new_total] = (index, subtotal)
        if target in reached:
            break

    if target not in reached:
        return None

    chosen: List[Card] = []
    subtotal = target
    while subtotal > 0:
        index, previous = reached[subtotal]
        chosen.append(ordered[index])
        subtotal = previous
    chosen.reverse()
    return chosen


def greedy_overpay(pool: Sequence[Card], target: int) -> List[Card]:
    """Take cards from the most valuable down until the target is covered."""
    chosen: List[Card] = []
    paid = 0
    for card in sorted(pool, key=lambda c: c.value, reverse=True):
        if paid >= target:
            break
        chosen.append(card)
        paid += card.value
    return chosen


def _is_attached(card: Card) -> bool:
    return isinstance(card, BuildingCard) and card.attached_color is not None


def _pay_from(pool: List[Card], target: int) -> List[Card]:
    if not pool or target <= 0:
        return []
    exact = find_exact_subset(pool, target)
    if exact is not None:
        return exact
    if total_value(pool) >= target:
        return greedy_overpay(pool, target)
    return list(pool)


def select_payment(
    available: Sequence[Card],
    amount_due: int,
    owner_properties: Optional[Sequence[Card]] = None,
) -> List[Card]:
    """
    Choose which assets pay `amount_due`.

    Stages, in order:
    1. banked assets (money, banked action, rent and building cards)
    2. houses and hotels still attached to a complete set
    3. properties outside complete sets
    4. properties that break a complete set

    Each stage pays the remaining shortfall with an exact-sum subset when one
    exists, otherwise with a greedy overpayment when the stage can cover it,
    otherwise with everything it has. Zero-valued cards are never chosen.

    Args:
        available: The debtor's bank and property cards. Hand cards are
            never eligible and must not be passed in.
        amount_due: Amount owed.
        owner_properties: The debtor's full property area, used to decide
            which properties sit in complete sets. Defaults to the property
            cards in `available`.

    Returns:
        The selected cards; empty when the debtor has nothing of value.
    """
    if amount_due <= 0:
        return []

    if owner_properties is None:
        owner_properties = [c for c in available if c.is_property]
    owner_properties = list(owner_properties)

    cash_like = [c for c in available if not c.is_property and c.value > 0]
    banked = [c for c in cash_like if not _is_attached(c)]
    buildings = [c for c in cash_like if _is_attached(c)]
    properties = [c for c in available if c.is_property and c.value > 0]
    safe = [c for c in properties if not is_in_complete_set(owner_properties, c)]
    set_breaking = [c for c in properties if c not in safe]

    selected: List[Card] = []
    remaining = amount_due
    for pool in (banked, buildings, safe, set_breaking):
        if remaining <= 0:
            break
        picked = _pay_from(pool, remaining)
        selected.extend(picked)
        remaining -= total_value(picked)

    return selected
