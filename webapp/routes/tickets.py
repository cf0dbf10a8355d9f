from __future__ import annotations

from flask import Blueprint, jsonify, request

from ..game import get_game
from ..schemas import ChangeResponse, PurchaseResponse, StateResponse, TicketRequest, TicketResponse

bp = Blueprint("tickets", __name__)


@bp.get("/state")
def get_state():
    game = get_game()
    state = game.call(game.engine.state)
    return jsonify(StateResponse.from_state(state).model_dump())


@bp.get("/changes")
def list_changes():
    changes = [ChangeResponse(**change).model_dump() for change in get_game().recent_changes()]
    return jsonify(changes)


@bp.get("/tickets")
def list_tickets():
    game = get_game()
    tickets = game.call(lambda: game.engine.tickets)
    return jsonify([TicketResponse.from_ticket(i, t).model_dump() for i, t in enumerate(tickets)])


@bp.post("/tickets")
def add_ticket():
    payload = request.get_json(force=True, silent=True) or {}
    data = TicketRequest.model_validate(payload)

    game = get_game()
    engine = game.engine

    def _add():
        ticket = engine.add_quick_pick() if data.quick_pick else engine.add_ticket(data.numbers)
        return engine.ticket_count - 1, ticket

    index, ticket = game.call(_add)
    return jsonify(TicketResponse.from_ticket(index, ticket).model_dump()), 201


@bp.delete("/tickets/<int:index>")
def delete_ticket(index: int):
    game = get_game()
    ticket = game.call(game.engine.delete_ticket, index)
    return jsonify(TicketResponse.from_ticket(index, ticket).model_dump())


@bp.post("/tickets/buy")
def buy_tickets():
    game = get_game()
    outcome = game.call(game.engine.buy_tickets)
    return jsonify(PurchaseResponse.from_outcome(outcome).model_dump())
