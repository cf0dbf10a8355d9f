from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .config import load_settings
from .engine import LotteryEngine
from .errors import LotteryError
from .types import PurchaseOutcome


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
    )


def format_outcome(outcome: PurchaseOutcome) -> str:
    lines = [f"Winning numbers: {', '.join(str(n) for n in outcome.sorted_winning_numbers())}"]
    for result in outcome.results:
        numbers = ", ".join(str(n) for n in result.ticket.numbers)
        lines.append(
            f"  ticket #{result.index + 1} [{numbers}]: {result.match_count} match(es), won {result.payout}"
        )
    lines.append(f"Paid {outcome.debited}, won {outcome.credited}, balance {outcome.balance}")
    return "\n".join(lines)


def run(args: argparse.Namespace) -> List[PurchaseOutcome]:
    settings = load_settings(args.env_file)
    configure_logging(args.verbose)
    logger = logging.getLogger("basmalottery.service")

    engine = LotteryEngine(settings)
    engine.subscribe(lambda key, value: logger.debug("%s -> %r", key, value))

    for numbers in args.ticket or []:
        engine.add_ticket(numbers)
    for _ in range(args.quick_picks):
        engine.add_quick_pick()

    outcomes = []
    for _ in range(args.draws):
        outcome = engine.buy_tickets()
        print(format_outcome(outcome))
        outcomes.append(outcome)
    return outcomes


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Basmalottery number-matching game")
    parser.add_argument("--env-file", type=str, default=None, help="Path to .env file with game settings")
    parser.add_argument(
        "--ticket",
        type=int,
        nargs="+",
        action="append",
        metavar="N",
        help="Numbers for one ticket; repeat the flag for more tickets.",
    )
    parser.add_argument("--quick-picks", type=int, default=0, help="Add this many randomly picked tickets.")
    parser.add_argument("--draws", type=int, default=1, help="How many times to buy the held tickets.")
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging (default INFO)."
    )
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> None:
    args = parse_args(argv)
    try:
        run(args)
    except LotteryError as exc:
        logging.getLogger("basmalottery.service").error("%s: %s", type(exc).__name__, exc)
        sys.exit(1)
    except KeyboardInterrupt:
        print("Game stopped by user.")


if __name__ == "__main__":
    main()
