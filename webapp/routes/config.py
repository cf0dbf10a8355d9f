from __future__ import annotations

from flask import Blueprint, jsonify

from ..game import get_game
from ..schemas import ConfigResponse

bp = Blueprint("config", __name__)


@bp.get("/config")
def get_config():
    settings = get_game().engine.settings
    response = ConfigResponse(
        max_numbers_per_ticket=settings.max_numbers_per_ticket,
        max_player_tickets=settings.max_player_tickets,
        player_starting_money=str(settings.player_starting_money),
        ticket_cost=str(settings.ticket_cost),
        ticket_minimum_number=settings.ticket_minimum_number,
        ticket_maximum_number=settings.ticket_maximum_number,
        randomizer=settings.randomizer.value,
    )
    return jsonify(response.model_dump())
