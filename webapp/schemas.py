from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, Field, StrictInt, model_validator

from basmalottery.types import PurchaseOutcome, SessionState, Ticket


class TicketRequest(BaseModel):
    numbers: Optional[List[StrictInt]] = Field(None, description="The ticket's numbers, in entry order.")
    quick_pick: bool = Field(False, description="Let the randomizer pick the numbers.")

    @model_validator(mode="after")
    def check_numbers_or_quick_pick(self) -> "TicketRequest":
        if self.quick_pick and self.numbers is not None:
            raise ValueError("Send either numbers or quick_pick, not both.")
        if not self.quick_pick and self.numbers is None:
            raise ValueError("numbers is required unless quick_pick is set.")
        return self


class TicketResponse(BaseModel):
    index: int
    numbers: List[int]

    @classmethod
    def from_ticket(cls, index: int, ticket: Ticket) -> "TicketResponse":
        return cls(index=index, numbers=list(ticket.numbers))


class StateResponse(BaseModel):
    balance: str
    ticket_count: int
    ticket_subtotal: str
    tickets: List[TicketResponse]

    @classmethod
    def from_state(cls, state: SessionState) -> "StateResponse":
        return cls(
            balance=str(state.balance),
            ticket_count=state.ticket_count,
            ticket_subtotal=str(state.ticket_subtotal),
            tickets=[TicketResponse.from_ticket(i, t) for i, t in enumerate(state.tickets)],
        )


class TicketResultResponse(BaseModel):
    index: int
    numbers: List[int]
    match_count: int
    payout: str


class PurchaseResponse(BaseModel):
    winning_numbers: List[int]
    results: List[TicketResultResponse]
    debited: str
    credited: str
    balance: str

    @classmethod
    def from_outcome(cls, outcome: PurchaseOutcome) -> "PurchaseResponse":
        return cls(
            winning_numbers=list(outcome.sorted_winning_numbers()),
            results=[
                TicketResultResponse(
                    index=result.index,
                    numbers=list(result.ticket.numbers),
                    match_count=result.match_count,
                    payout=str(result.payout),
                )
                for result in outcome.results
            ],
            debited=str(outcome.debited),
            credited=str(outcome.credited),
            balance=str(outcome.balance),
        )


class ConfigResponse(BaseModel):
    max_numbers_per_ticket: int
    max_player_tickets: int
    player_starting_money: str
    ticket_cost: str
    ticket_minimum_number: int
    ticket_maximum_number: int
    randomizer: str


class ChangeResponse(BaseModel):
    key: str
    value: Any
