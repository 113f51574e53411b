"""CLI entry point for the `user-events` command."""

from __future__ import annotations

import argparse
import logging
import sys

from .config import DEFAULT_CONFIG_FILE, Settings, load_settings
from .exceptions import UserEventsError
from .models import Entity
from .notifications import ENTITY_CREATED, WILDCARD
from .observers import LogFileObserver, OnboardingNotification
from .store import EntityStore

DEMO_USER = {"name": "Ernesto Sevilla", "email": "esevilla@example.com"}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="user-events", description="User repository event demo")
    parser.add_argument("--config", default=DEFAULT_CONFIG_FILE, help=f"Settings file (default: {DEFAULT_CONFIG_FILE})")
    parser.add_argument("--source", help="CSV file with id,name,email rows")
    parser.add_argument("--log-file", help="Event log file path")
    parser.add_argument("--admin-email", help="Recipient of onboarding notifications")
    parser.add_argument("--log-level", choices=["debug", "info", "warning"], help="Log level")
    return parser


def _print_users(users: list[Entity]) -> None:
    print(f"{'ID':<34} {'Name':<20} Email")
    for user in users:
        print(f"{str(user.id):<34} {str(user.get('name', '')):<20} {user.get('email', '')}")


def run(settings: Settings) -> EntityStore:
    """Wire the observers, load the source and walk a user through its lifecycle."""
    store = EntityStore()
    store.attach(LogFileObserver(settings.log_file), WILDCARD)
    store.attach(OnboardingNotification(settings.admin_email), ENTITY_CREATED)

    store.bootstrap_load(settings.source)
    _print_users(store.all())

    user = store.create(DEMO_USER)
    print(f"Created user {user.id}")

    store.delete(user)
    print(f"Deleted user {user.id}")
    return store


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config).with_overrides(
            source=args.source,
            log_file=args.log_file,
            admin_email=args.admin_email,
            log_level=args.log_level,
        )
        logging.basicConfig(
            level=settings.log_level.upper(),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        run(settings)
    except UserEventsError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
