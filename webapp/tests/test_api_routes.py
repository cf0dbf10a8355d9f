import unittest
from decimal import Decimal
from typing import Iterable, List

from basmalottery.config import LotterySettings
from basmalottery.engine import LotteryEngine
from basmalottery.errors import RandomizerUnavailableError
from basmalottery.randomizer import Randomizer
from webapp.app import create_app


class ScriptedRandomizer(Randomizer):
    def __init__(self, values: Iterable[int]) -> None:
        self._values: List[int] = list(values)

    def generate(self, minimum: int, maximum: int) -> int:
        if not self._values:
            raise RandomizerUnavailableError("script exhausted")
        return self._values.pop(0)


class TicketRoutesTests(unittest.TestCase):
    def _make_client(self, values=(), **updates):
        settings = LotterySettings(
            player_starting_money=Decimal("10.0"), ticket_cost=Decimal("2.0")
        ).copy(**updates)
        self.engine = LotteryEngine(settings, randomizer=ScriptedRandomizer(values))
        app = create_app(engine=self.engine)
        return app.test_client()

    def test_health(self):
        client = self._make_client()
        response = client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json(), {"status": "ok"})

    def test_config(self):
        client = self._make_client()
        payload = client.get("/config").get_json()
        self.assertEqual(payload["max_numbers_per_ticket"], 4)
        self.assertEqual(payload["ticket_cost"], "2.0")
        self.assertEqual(payload["randomizer"], "local")

    def test_add_ticket_and_state(self):
        client = self._make_client()

        response = client.post("/tickets", json={"numbers": [1, 2, 3, 4]})
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.get_json(), {"index": 0, "numbers": [1, 2, 3, 4]})

        state = client.get("/state").get_json()
        self.assertEqual(state["balance"], "10.0")
        self.assertEqual(state["ticket_count"], 1)
        self.assertEqual(state["ticket_subtotal"], "2.0")
        self.assertEqual(state["tickets"], [{"index": 0, "numbers": [1, 2, 3, 4]}])

        tickets = client.get("/tickets").get_json()
        self.assertEqual(tickets, [{"index": 0, "numbers": [1, 2, 3, 4]}])

    def test_quick_pick(self):
        client = self._make_client(values=[9, 2, 9, 4, 6])
        response = client.post("/tickets", json={"quick_pick": True})
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.get_json()["numbers"], [9, 2, 4, 6])

    def test_invalid_ticket_returns_fields(self):
        client = self._make_client()
        response = client.post("/tickets", json={"numbers": [1, 1, 2, 3]})
        self.assertEqual(response.status_code, 400)
        payload = response.get_json()
        self.assertEqual(payload["type"], "ValidationError")
        self.assertEqual(payload["fields"], ["numbers"])
        self.assertEqual(self.engine.ticket_count, 0)

    def test_malformed_body(self):
        client = self._make_client()
        response = client.post("/tickets", json={"numbers": "lots"})
        self.assertEqual(response.status_code, 400)
        self.assertIn("fields", response.get_json())

        response = client.post("/tickets", json={})
        self.assertEqual(response.status_code, 400)

    def test_numbers_must_be_real_integers(self):
        client = self._make_client()
        for numbers in (["1", "2", "3", "4"], [5.0, 6, 7, 8], [True, 2, 3, 9]):
            with self.subTest(numbers=numbers):
                response = client.post("/tickets", json={"numbers": numbers})
                self.assertEqual(response.status_code, 400)
                self.assertIn("fields", response.get_json())
        self.assertEqual(self.engine.ticket_count, 0)

    def test_delete_ticket(self):
        client = self._make_client()
        client.post("/tickets", json={"numbers": [1, 2, 3, 4]})
        client.post("/tickets", json={"numbers": [5, 6, 7, 8]})

        response = client.delete("/tickets/0")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()["numbers"], [1, 2, 3, 4])
        self.assertEqual(client.get("/state").get_json()["ticket_subtotal"], "2.0")

        response = client.delete("/tickets/5")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json()["type"], "TicketIndexError")

    def test_buy_tickets(self):
        client = self._make_client(values=[1, 2, 3, 4])
        client.post("/tickets", json={"numbers": [1, 2, 3, 4]})

        response = client.post("/tickets/buy")
        self.assertEqual(response.status_code, 200)
        payload = response.get_json()
        self.assertEqual(payload["winning_numbers"], [1, 2, 3, 4])
        self.assertEqual(payload["results"][0]["match_count"], 4)
        self.assertEqual(payload["results"][0]["payout"], "256")
        self.assertEqual(payload["debited"], "2.0")
        self.assertEqual(payload["balance"], "264.0")

    def test_buy_without_funds(self):
        client = self._make_client(player_starting_money=Decimal("1.0"))
        client.post("/tickets", json={"numbers": [1, 2, 3, 4]})

        response = client.post("/tickets/buy")
        self.assertEqual(response.status_code, 402)
        self.assertEqual(response.get_json()["type"], "InsufficientFundsError")
        self.assertEqual(self.engine.balance, Decimal("1.0"))

    def test_randomizer_outage(self):
        client = self._make_client(values=[])
        client.post("/tickets", json={"numbers": [1, 2, 3, 4]})

        response = client.post("/tickets/buy")
        self.assertEqual(response.status_code, 503)
        self.assertEqual(self.engine.balance, Decimal("10.0"))

    def test_changes_feed(self):
        client = self._make_client()
        client.post("/tickets", json={"numbers": [1, 2, 3, 4]})

        changes = client.get("/changes").get_json()
        self.assertEqual(
            changes,
            [
                {"key": "ticket_count", "value": 1},
                {"key": "ticket_subtotal", "value": "2.0"},
                {"key": "tickets", "value": [[1, 2, 3, 4]]},
            ],
        )


if __name__ == "__main__":
    unittest.main()
