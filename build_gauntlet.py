#!/usr/bin/env python3
"""
Gauntlet Leg 3 builder CLI

Loads seeds, runs the guillotine phase and best-ball scoring for every
fully seeded league, builds the god brackets and the grand championship,
and writes one snapshot per year.

Usage:
    python build_gauntlet.py
    python build_gauntlet.py --year 2025 --seeds data/seeds_2025.json --output-dir out
    python build_gauntlet.py --supabase --split
    python build_gauntlet.py --only-in-window --force
"""

import argparse
import logging
import os
import sys
from pathlib import Path

import requests

from gauntlet.builder import build_gauntlet
from gauntlet.config import get_config
from gauntlet.logging_config import setup_logging
from gauntlet.players import PlayerDirectory
from gauntlet.retry import RetryPolicy
from gauntlet.schedule import is_game_window
from gauntlet.seeds import JsonSeedRegistry, PostgrestSeedRegistry, SeedRegistryError
from gauntlet.sleeper import FeedError, SleeperClient
from gauntlet.store import JsonResultStore, ResultStoreError


def make_registry(args, retry: RetryPolicy):
    if args.supabase:
        url = os.environ.get('SUPABASE_URL') or os.environ.get('NEXT_PUBLIC_SUPABASE_URL')
        key = os.environ.get('SUPABASE_SERVICE_ROLE_KEY')
        if not url or not key:
            raise SeedRegistryError('SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set')
        return PostgrestSeedRegistry(url, key, table=args.seed_table, retry=retry)
    return JsonSeedRegistry(args.seeds)


def load_directory(args, feed: SleeperClient) -> PlayerDirectory:
    cache = Path(args.players_cache) if args.players_cache else None
    if cache and cache.exists() and not args.refresh_players:
        return PlayerDirectory.from_file(cache)
    directory = PlayerDirectory(feed.get_players())
    if cache:
        directory.save(cache)
    return directory


def main():
    parser = argparse.ArgumentParser(description="Gauntlet Leg 3 bracket builder")
    parser.add_argument(
        "--year", "-y",
        type=int,
        default=None,
        help="Tournament year (defaults to the config year)",
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to gauntlet_config.json",
    )
    parser.add_argument(
        "--seeds", "-s",
        default="data/seeds.json",
        help="Seed registry JSON file (ignored with --supabase)",
    )
    parser.add_argument(
        "--supabase",
        action="store_true",
        help="Read seeds from Supabase (SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY)",
    )
    parser.add_argument(
        "--seed-table",
        default="gauntlet_seeds",
        help="Supabase seed table name",
    )
    parser.add_argument(
        "--output-dir", "-o",
        default="web/data/gauntlet/leg3",
        help="Directory for snapshot files",
    )
    parser.add_argument(
        "--split",
        action="store_true",
        help="Also write per-division, grand championship and manifest files",
    )
    parser.add_argument(
        "--players-cache",
        default="data/sleeper_players.json",
        help="Cached Sleeper players directory",
    )
    parser.add_argument(
        "--refresh-players",
        action="store_true",
        help="Re-download the players directory even if cached",
    )
    parser.add_argument(
        "--only-in-window",
        action="store_true",
        help="Skip the build outside NFL game windows",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Build even outside game windows",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Debug logging",
    )
    parser.add_argument(
        "--no-log-file",
        action="store_true",
        help="Log to console only",
    )

    args = parser.parse_args()
    logger = setup_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_to_file=not args.no_log_file,
    )

    config = get_config(args.config)
    if args.year:
        config = config.model_copy(update={'year': args.year})

    if not is_game_window(timezone=config.timezone):
        if args.only_in_window and not args.force:
            logger.info("Outside NFL game window, skipping build (use --force to override)")
            sys.exit(0)
        logger.info("Not in game window. Still running.")

    retry = RetryPolicy.from_settings(config.retry, retry_on=(requests.RequestException,))
    feed = SleeperClient(retry=retry)
    store = JsonResultStore(args.output_dir)

    try:
        registry = make_registry(args, retry)
        directory = load_directory(args, feed)
        logger.info(f"Player directory: {len(directory)} players")
        result = build_gauntlet(config, registry, feed, directory, store=store)
        if args.split:
            store.write_split(result.payload)
    except (SeedRegistryError, ResultStoreError, FeedError) as e:
        logger.error(f"Fatal error building Gauntlet Leg 3: {e}")
        sys.exit(1)

    print("\n" + "=" * 60)
    print(f"GAUNTLET LEG 3 ({config.year}) - status: {result.status}")
    print("=" * 60)
    for division, data in result.payload['divisions'].items():
        champs = ', '.join(c['ownerName'] for c in data['champions']) or 'none yet'
        print(f"  {division}: {len(data['gods'])} gods, champions: {champs}")
    grand = result.payload.get('grandChampionship') or {}
    for standing in grand.get('standings', []):
        print(f"  {standing['rank']}. {standing['ownerName']} ({standing['godName']}): "
              f"{standing['weekScore']:.2f} pts")

    if result.failures:
        for failure in result.failures:
            logger.error(f"League {failure.league_id} failed: {failure.error}")
        sys.exit(2)


if __name__ == "__main__":
    main()
