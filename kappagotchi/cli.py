#!/usr/bin/env python3
# kappagotchi/cli.py
"""
kappagotchi command line.

Every one-shot command loads the saved game, ticks it up to now, applies the
action, prints the resulting lines and the screen, then saves. ``run`` keeps
ticking with a live panel until Ctrl+C.
"""
import argparse
import asyncio
import logging
import signal
import sys
from typing import List, Optional

from rich.live import Live

from kappagotchi import __version__
from kappagotchi.config.config import load_config
from kappagotchi.core.exceptions import KappagotchiError
from kappagotchi.core.manager import Manager
from kappagotchi.data.state_types import FoodKind, Result
from kappagotchi.log_config import setup_logging
from kappagotchi.ui.view import View
from kappagotchi.ui.voice import Voice

logger = logging.getLogger("kappagotchi.cli")

FOOD_CHOICES = [k.value for k in FoodKind]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="kappagotchi", description="Raise a kappa in your terminal.")
    parser.add_argument("--version", action="version", version=f"kappagotchi {__version__}")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--config", "-C", default=None,
                        help="User config file (default: $KAPPA_CONFIG or ~/.kappagotchi/config.toml)")

    sub = parser.add_subparsers(dest="command")
    sub.add_parser("status", help="Show the current screen")
    sub.add_parser("fish", help="Cast your line")
    sub.add_parser("adopt", help="Take the caught kappa home")
    sub.add_parser("release", help="Let the caught kappa go")
    sub.add_parser("water", help="Water the kappa")
    feed = sub.add_parser("feed", help="Feed the kappa")
    feed.add_argument("kind", nargs="?", default=FoodKind.CUCUMBER.value, choices=FOOD_CHOICES)
    buy = sub.add_parser("buy", help="Buy food from the shop")
    buy.add_argument("kind", choices=FOOD_CHOICES)
    coins = sub.add_parser("coins", help="Add coins")
    coins.add_argument("amount", type=int)
    sub.add_parser("ad", help="Claim the ad reward")
    sub.add_parser("run", help="Keep the kappa alive with a live screen")
    return parser


def _report(view: View, voice: Voice, results: List[Result]) -> int:
    code = 0
    for result in results:
        for line in voice.get_event_lines(result.events):
            view.say(line)
        error_line = voice.get_error_line(result.error)
        if error_line:
            view.say(error_line)
            code = 1
    return code


async def run_command(manager: Manager, args: argparse.Namespace, view: View, voice: Voice) -> int:
    command = args.command or "status"
    now = manager.now()
    results = [await manager.tick(now)]

    if command == "fish":
        results.append(await manager.fish(now))
    elif command == "adopt":
        results.append(await manager.adopt(now))
    elif command == "release":
        results.append(await manager.release(now))
    elif command == "water":
        results.append(await manager.water(now))
    elif command == "feed":
        results.append(await manager.feed(args.kind, now))
    elif command == "buy":
        results.append(await manager.buy(args.kind, now))
    elif command == "coins":
        results.append(await manager.grant_coins(args.amount, now))
    elif command == "ad":
        results.append(await manager.claim_ad_reward(now))

    code = _report(view, voice, results)
    manager.flush()
    view.show(manager.state, now)
    return code


async def run_live(manager: Manager, view: View, voice: Voice) -> int:
    stop = asyncio.Event()
    loop = asyncio.get_running_loop()

    def handle_signal():
        logger.info("Shutdown requested")
        stop.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, handle_signal)
        except NotImplementedError:
            signal.signal(sig, lambda s, f: handle_signal())

    recent: List[str] = []

    with Live(view.panel(manager.state, manager.now()), console=view.console,
              refresh_per_second=4) as live:
        def on_tick(result: Result) -> None:
            recent.extend(voice.get_event_lines(result.events))
            del recent[:-5]
            live.update(view.panel(manager.state, manager.now(), recent))

        await manager.run(stop_event=stop, on_tick=on_tick)
    return 0


async def main_async(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config(args.config)
    setup_logging(debug_mode=args.debug, default_level=config.get("log", {}).get("level", "INFO"))

    manager = Manager(config=config)
    try:
        manager.bootstrap()
    except KappagotchiError as e:
        logger.error("Startup failed: %s", e)
        print(f"kappagotchi: {e}", file=sys.stderr)
        return 2

    view = View(manager.rules)
    voice = Voice()
    if args.command == "run":
        return await run_live(manager, view, voice)
    return await run_command(manager, args, view, voice)


def main(argv: Optional[List[str]] = None) -> int:
    try:
        return asyncio.run(main_async(argv))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
