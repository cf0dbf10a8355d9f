import unittest

from basmalottery.store import PropertyStore


class PropertyStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self.calls = []

    def _record(self, label):
        return lambda key, value: self.calls.append((label, key, value))

    def test_get_missing_key_returns_none(self) -> None:
        store = PropertyStore()
        self.assertIsNone(store.get("balance"))
        self.assertEqual(store.get("balance", 0), 0)

    def test_set_returns_value_and_notifies_observers(self) -> None:
        store = PropertyStore()
        store.subscribe(self._record("any"))
        store.on("balance", self._record("balance"))

        result = store.set("balance", 5)

        self.assertEqual(result, 5)
        self.assertEqual(store.get("balance"), 5)
        self.assertEqual(self.calls, [("balance", "balance", 5), ("any", "balance", 5)])

    def test_hooks_run_in_registration_order_before_observers(self) -> None:
        store = PropertyStore(hooks={"tickets": [self._record("first"), self._record("second")]})
        store.bind_hook("tickets", self._record("third"))
        store.subscribe(self._record("any"))

        store.set("tickets", (1,))

        self.assertEqual(
            [label for label, _, _ in self.calls], ["first", "second", "third", "any"]
        )

    def test_hooks_only_fire_for_their_key(self) -> None:
        store = PropertyStore(hooks={"tickets": [self._record("hook")]})
        store.set("balance", 1)
        self.assertEqual(self.calls, [])

    def test_silent_set_skips_every_notification(self) -> None:
        store = PropertyStore(hooks={"tickets": [self._record("hook")]})
        store.subscribe(self._record("any"))
        store.on("tickets", self._record("key"))

        store.set("tickets", (), silent=True)

        self.assertEqual(store.get("tickets"), ())
        self.assertEqual(self.calls, [])

    def test_silent_hooks_still_notifies_general_observers(self) -> None:
        store = PropertyStore(hooks={"tickets": [self._record("hook")]})
        store.subscribe(self._record("any"))
        store.on("tickets", self._record("key"))

        store.set("tickets", (), silent_hooks=True)

        self.assertEqual(self.calls, [("any", "tickets", ())])

    def test_hook_may_set_other_keys_inline(self) -> None:
        store = PropertyStore()
        store.bind_hook("tickets", lambda key, value: store.set("ticket_count", len(value)))
        seen = []
        store.subscribe(lambda key, value: seen.append((key, store.get("ticket_count"))))

        store.set("tickets", (1, 2, 3))

        self.assertEqual(store.get("ticket_count"), 3)
        self.assertEqual(seen, [("ticket_count", 3), ("tickets", 3)])

    def test_event_name(self) -> None:
        self.assertEqual(PropertyStore.event_name("tickets"), "changed:tickets")

    def test_initial_values_do_not_notify(self) -> None:
        store = PropertyStore(initial={"balance": 10})
        store.subscribe(self._record("any"))
        self.assertIn("balance", store)
        self.assertEqual(store.keys(), ["balance"])
        self.assertEqual(self.calls, [])


if __name__ == "__main__":
    unittest.main()
