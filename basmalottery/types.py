from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import FrozenSet, Tuple


class RandomizerKind(str, Enum):
    LOCAL = "local"
    EXTERNAL = "external"


@dataclass(frozen=True)
class Ticket:
    numbers: Tuple[int, ...]

    @property
    def number_set(self) -> FrozenSet[int]:
        return frozenset(self.numbers)

    def to_dict(self) -> dict:
        return {"numbers": list(self.numbers)}


@dataclass(frozen=True)
class SessionState:
    balance: Decimal
    tickets: Tuple[Ticket, ...]
    ticket_count: int
    ticket_subtotal: Decimal

    def to_dict(self) -> dict:
        return {
            "balance": str(self.balance),
            "tickets": [ticket.to_dict() for ticket in self.tickets],
            "ticket_count": self.ticket_count,
            "ticket_subtotal": str(self.ticket_subtotal),
        }


@dataclass(frozen=True)
class TicketResult:
    index: int
    ticket: Ticket
    match_count: int
    payout: Decimal


@dataclass(frozen=True)
class PurchaseOutcome:
    """Result of one purchase: the draw plus how every held ticket fared."""

    winning_numbers: FrozenSet[int]
    results: Tuple[TicketResult, ...]
    debited: Decimal
    credited: Decimal
    balance: Decimal

    @property
    def winners(self) -> Tuple[TicketResult, ...]:
        return tuple(result for result in self.results if result.match_count > 0)

    def sorted_winning_numbers(self) -> Tuple[int, ...]:
        return tuple(sorted(self.winning_numbers))
