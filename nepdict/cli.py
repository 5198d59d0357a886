"""Command-line interface for nepdict lookups."""

import sys
import json
import asyncio
import argparse
from typing import List, Optional

from .config import ConfigManager
from .error_handling import ConfigurationError
from .logging_config import setup_logging
from .models import Entry, SearchField, SearchResult
from .search_engine import DictionaryAPI, SearchEngine


def _entry_dict(entry: Entry) -> dict:
    return entry.model_dump(mode="json")


def _result_dict(result: SearchResult) -> dict:
    return result.model_dump(mode="json")


def _format_entry(entry: Entry) -> str:
    line = f"{entry.word} ({entry.romanization}) [{entry.part_of_speech}]"
    if entry.definitions:
        line += " - " + "; ".join(entry.definitions)
    return line


def _print_entries(entries: List[Entry], as_json: bool) -> None:
    if as_json:
        print(json.dumps([_entry_dict(e) for e in entries], ensure_ascii=False, indent=2))
        return
    for entry in entries:
        print(_format_entry(entry))


def _parse_fields(raw: Optional[str]) -> Optional[List[SearchField]]:
    if not raw:
        return None
    try:
        return [SearchField(name.strip()) for name in raw.split(",") if name.strip()]
    except ValueError:
        valid = ", ".join(f.value for f in SearchField)
        raise argparse.ArgumentTypeError(f"Unknown field in {raw!r}; choose from: {valid}")


async def search_command(api: DictionaryAPI, args) -> int:
    """Ranked search."""
    results = await api.search_in_fields(args.query, _parse_fields(args.fields))
    if args.json:
        print(json.dumps([_result_dict(r) for r in results], ensure_ascii=False, indent=2))
    else:
        for rank, result in enumerate(results, 1):
            info = result.match_info
            fields = ", ".join(f.value for f in info.matched_fields) or "-"
            print(f"{rank:>2}. {_format_entry(result.entry)}")
            print(f"    score: {info.total_score:.1f}  matched: {fields}")
    if not results:
        print(f"No results for: {args.query}", file=sys.stderr)
    return 0 if results else 1


async def similar_command(api: DictionaryAPI, args) -> int:
    entries = await api.find_similar_words(args.word, args.threshold)
    _print_entries(entries, args.json)
    return 0 if entries else 1


async def suggest_command(api: DictionaryAPI, args) -> int:
    suggestions = await api.get_search_suggestions(args.partial, args.limit)
    if args.json:
        print(json.dumps(suggestions, ensure_ascii=False))
    else:
        for suggestion in suggestions:
            print(suggestion)
    return 0 if suggestions else 1


async def category_command(api: DictionaryAPI, args) -> int:
    entries = await api.get_words_by_category(args.name)
    _print_entries(entries, args.json)
    return 0 if entries else 1


async def random_command(api: DictionaryAPI, args) -> int:
    entries = await api.get_random_words(args.count)
    _print_entries(entries, args.json)
    return 0 if entries else 1


async def categories_command(api: DictionaryAPI, args) -> int:
    categories = await api.get_available_categories()
    if args.json:
        print(json.dumps(categories, ensure_ascii=False))
    else:
        for category in categories:
            print(category)
    return 0


async def stats_command(api: DictionaryAPI, args) -> int:
    await api.load()
    stats = api.get_search_stats()
    if args.json:
        print(stats.model_dump_json(indent=2))
    else:
        print(f"Entries:    {stats.total_entries}")
        print(f"Index keys: {stats.index_size}")
        print(f"Cached:     {stats.cache_size}")
    return 0


def generate_config(args) -> int:
    """Write or print a configuration template."""
    config_manager = ConfigManager()
    if args.output:
        config_manager.save_template(args.output)
        print(f"Configuration template saved to: {args.output}")
    else:
        print(json.dumps(ConfigManager.DEFAULT_CONFIG, indent=2))
    return 0


COMMANDS = {
    "search": search_command,
    "similar": similar_command,
    "suggest": suggest_command,
    "category": category_command,
    "random": random_command,
    "categories": categories_command,
    "stats": stats_command,
}


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nepdict",
        description="Nepali-English dictionary lookup",
    )
    parser.add_argument("--config", "-c", help="Path to JSON configuration file")
    parser.add_argument("--data-dir", help="Directory containing vocabulary JSON files")
    parser.add_argument("--json", action="store_true", help="Print machine-readable JSON")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    search_parser = subparsers.add_parser("search", help="Ranked search")
    search_parser.add_argument("query", help="Devanagari, romanized or English text")
    search_parser.add_argument(
        "--fields", "-f",
        help="Comma-separated fields: word, romanization, definitions, category, examples",
    )

    similar_parser = subparsers.add_parser("similar", help="Words spelled like WORD")
    similar_parser.add_argument("word")
    similar_parser.add_argument("--threshold", "-t", type=float, default=None)

    suggest_parser = subparsers.add_parser("suggest", help="Prefix suggestions")
    suggest_parser.add_argument("partial")
    suggest_parser.add_argument("--limit", "-l", type=int, default=None)

    category_parser = subparsers.add_parser("category", help="Words in a category")
    category_parser.add_argument("name")

    random_parser = subparsers.add_parser("random", help="Random words")
    random_parser.add_argument("--count", "-n", type=int, default=None)

    subparsers.add_parser("categories", help="List categories")
    subparsers.add_parser("stats", help="Index and cache statistics")

    config_parser = subparsers.add_parser("generate-config", help="Generate config template")
    config_parser.add_argument("--output", "-o", help="Output file path")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "generate-config":
        return generate_config(args)

    try:
        config = ConfigManager(args.config).load()
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    if args.data_dir:
        config.data.data_dir = args.data_dir
    setup_logging(
        format=config.logging.format,
        level=args.log_level or config.logging.level,
        log_file=config.logging.log_file,
    )

    api = DictionaryAPI(SearchEngine.from_config(config))
    try:
        return asyncio.run(COMMANDS[args.command](api, args))
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
