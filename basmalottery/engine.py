from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Callable, FrozenSet, Iterable, List, Optional, Sequence, Set, Tuple

from .config import LotterySettings
from .errors import (
    ConfigurationError,
    InsufficientFundsError,
    RandomizerUnavailableError,
    TicketIndexError,
    ValidationError,
)
from .randomizer import Randomizer, build_randomizer
from .store import PropertyStore
from .types import PurchaseOutcome, SessionState, Ticket, TicketResult

BALANCE = "balance"
TICKETS = "tickets"
TICKET_COUNT = "ticket_count"
TICKET_SUBTOTAL = "ticket_subtotal"


def check_number_match_count(ticket_numbers: Iterable[int], winning_numbers: Iterable[int]) -> int:
    return len(set(ticket_numbers).intersection(winning_numbers))


def calculate_payout(match_count: int) -> Decimal:
    if match_count <= 0:
        return Decimal(0)
    return Decimal((2 ** match_count) ** 2)


class LotteryEngine:
    """One player's game: tickets, balance, draws and payouts.

    Session values live in a `PropertyStore`; ``ticket_count`` and
    ``ticket_subtotal`` are recomputed by a hook on ``tickets`` and are
    therefore never stale when an observer is told about a change.
    """

    check_number_match_count = staticmethod(check_number_match_count)
    calculate_payout = staticmethod(calculate_payout)

    def __init__(
        self,
        settings: Optional[LotterySettings] = None,
        randomizer: Optional[Randomizer] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._settings = (settings or LotterySettings()).validate()
        self._randomizer = randomizer or build_randomizer(self._settings)
        self._logger = logger or logging.getLogger("basmalottery.engine")
        self._store = PropertyStore(
            hooks={TICKETS: [self._recompute_ticket_totals]},
            logger=self._logger.getChild("store"),
        )
        self._store.set(BALANCE, self._settings.player_starting_money)
        self._store.set(TICKETS, ())

    @property
    def settings(self) -> LotterySettings:
        return self._settings

    @property
    def store(self) -> PropertyStore:
        return self._store

    @property
    def balance(self) -> Decimal:
        return self._store.get(BALANCE)

    @property
    def tickets(self) -> Tuple[Ticket, ...]:
        return self._store.get(TICKETS)

    @property
    def ticket_count(self) -> int:
        return self._store.get(TICKET_COUNT)

    @property
    def ticket_subtotal(self) -> Decimal:
        return self._store.get(TICKET_SUBTOTAL)

    def state(self) -> SessionState:
        return SessionState(
            balance=self.balance,
            tickets=self.tickets,
            ticket_count=self.ticket_count,
            ticket_subtotal=self.ticket_subtotal,
        )

    def subscribe(self, callback: Callable[[str, Any], None]) -> None:
        self._store.subscribe(callback)

    def add_ticket(self, numbers: Sequence[int]) -> Ticket:
        errors = self._validate_numbers(numbers)
        if len(self.tickets) >= self._settings.max_player_tickets:
            errors.append(
                (TICKETS, f"no more than {self._settings.max_player_tickets} tickets may be held")
            )
        if errors:
            self._logger.warning("Rejected ticket %r: %s", numbers, errors)
            raise ValidationError(errors)

        ticket = Ticket(numbers=tuple(numbers))
        self._store.set(TICKETS, self.tickets + (ticket,))
        self._logger.info("Added ticket %s (%d held)", list(ticket.numbers), self.ticket_count)
        return ticket

    def add_quick_pick(self) -> Ticket:
        drawn = self._draw_distinct(self._settings.max_numbers_per_ticket)
        return self.add_ticket(drawn)

    def delete_ticket(self, index: int) -> Ticket:
        tickets = self.tickets
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(tickets):
            self._logger.warning("Rejected delete of ticket %r (%d held)", index, len(tickets))
            raise TicketIndexError(index, len(tickets))

        removed = tickets[index]
        self._store.set(TICKETS, tickets[:index] + tickets[index + 1:])
        self._logger.info("Removed ticket %s (%d held)", list(removed.numbers), self.ticket_count)
        return removed

    def generate_number(self, minimum: int, maximum: int) -> int:
        return self._randomizer.generate(minimum, maximum)

    def generate_winning_numbers(self, count: Optional[int] = None) -> FrozenSet[int]:
        if count is None:
            count = self._settings.max_numbers_per_ticket
        numbers = frozenset(self._draw_distinct(count))
        self._logger.debug("Drew winning numbers %s", sorted(numbers))
        return numbers

    def buy_tickets(self) -> PurchaseOutcome:
        balance = self.balance
        subtotal = self.ticket_subtotal
        if balance < subtotal:
            self._logger.warning("Purchase refused: balance %s < subtotal %s", balance, subtotal)
            raise InsufficientFundsError(balance, subtotal)

        # Draw before touching the balance so a randomizer failure changes nothing.
        winning_numbers = self.generate_winning_numbers(self._settings.max_numbers_per_ticket)

        self._store.set(BALANCE, balance - subtotal)

        results: List[TicketResult] = []
        credited = Decimal(0)
        for index, ticket in enumerate(self.tickets):
            match_count = check_number_match_count(ticket.numbers, winning_numbers)
            payout = calculate_payout(match_count)
            if match_count > 0:
                self._store.set(BALANCE, self.balance + payout)
                credited += payout
            results.append(
                TicketResult(index=index, ticket=ticket, match_count=match_count, payout=payout)
            )

        outcome = PurchaseOutcome(
            winning_numbers=winning_numbers,
            results=tuple(results),
            debited=subtotal,
            credited=credited,
            balance=self.balance,
        )
        self._logger.info(
            "Bought %d ticket(s) for %s; winning numbers %s; won %s; balance %s",
            len(results),
            subtotal,
            list(outcome.sorted_winning_numbers()),
            credited,
            outcome.balance,
        )
        return outcome

    def _recompute_ticket_totals(self, key: str, tickets: Tuple[Ticket, ...]) -> None:
        count = len(tickets)
        subtotal = self._settings.ticket_cost * count
        # Stage the subtotal first so no observer sees it disagree with the count.
        self._store.set(TICKET_SUBTOTAL, subtotal, silent=True)
        self._store.set(TICKET_COUNT, count)
        self._store.set(TICKET_SUBTOTAL, subtotal)

    def _validate_numbers(self, numbers: Sequence[int]) -> List[Tuple[str, str]]:
        settings = self._settings
        minimum = settings.ticket_minimum_number
        maximum = settings.ticket_maximum_number
        errors: List[Tuple[str, str]] = []

        if isinstance(numbers, (str, bytes)) or not isinstance(numbers, Sequence):
            return [("numbers", "must be a sequence of integers")]
        if len(numbers) != settings.max_numbers_per_ticket:
            errors.append(
                ("numbers", f"exactly {settings.max_numbers_per_ticket} numbers are required, got {len(numbers)}")
            )
        for value in numbers:
            if isinstance(value, bool) or not isinstance(value, int):
                errors.append(("numbers", f"{value!r} is not an integer"))
            elif not minimum <= value <= maximum:
                errors.append(("numbers", f"{value} is outside [{minimum}, {maximum}]"))

        seen: Set[int] = set()
        duplicates = []
        for value in numbers:
            if isinstance(value, bool) or not isinstance(value, int):
                continue
            if value in seen and value not in duplicates:
                duplicates.append(value)
            seen.add(value)
        if duplicates:
            errors.append(("numbers", f"duplicate numbers {duplicates}"))
        return errors

    def _draw_distinct(self, count: int) -> List[int]:
        minimum = self._settings.ticket_minimum_number
        maximum = self._settings.ticket_maximum_number
        available = self._settings.number_range_size
        if count < 0 or count > available:
            raise ConfigurationError(
                f"cannot draw {count} distinct numbers from [{minimum}, {maximum}] ({available} available)"
            )

        drawn: List[int] = []
        while len(drawn) < count:
            candidate = self.generate_number(minimum, maximum)
            if not minimum <= candidate <= maximum:
                raise RandomizerUnavailableError(
                    f"Randomizer returned {candidate}, outside [{minimum}, {maximum}]"
                )
            if candidate in drawn:
                continue
            drawn.append(candidate)
        return drawn
