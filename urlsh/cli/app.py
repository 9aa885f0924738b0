"""Command-line entry point for urlsh

Every invocation follows the same procedure:
- Step 1: Parse arguments and initialize logging
- Step 2: Load configuration and the store
- Step 3: Run exactly one command against the loaded store
- Step 4: Save the store if the command mutated it

Commands:
    shorten <url> [code]    (alias: s)
    expand <code>           (alias: e)
    list                    (alias: l)
    stats
    clean
    delete <code>           (aliases: del, rm)

Exit status:
    0: success, or a cancelled confirmation
    1: user-facing failure (invalid URL, taken or unknown code, unwritable store)
"""

import sys
import logging
import argparse
import functools
from dataclasses import dataclass
from collections.abc import Callable, Sequence

from urlsh.models import StoreModel
from urlsh.types import AppConfig
from urlsh.dao.base import ShortURLBaseDAO
from urlsh.dao.file import ShortURLFileDAO
from urlsh.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError, StoreUnwritableError
from urlsh.exceptions import InvalidURLError, InvalidShortcodeError, ConfigurationError
from urlsh.operations import assign_code, expand, list_entries, compute_store_stats, clean, delete
from urlsh.utils import load_config, store_path, generator_for, fetch_title, confirm, display_time, initialize_logging
from urlsh.utils.constants import (
    VERSION,
    UNKNOWN_ERROR,
    INVALID_URL,
    INVALID_SHORTCODE,
    SHORTCODE_TAKEN,
    SHORTCODE_NOT_FOUND,
    STORE_UNWRITABLE,
)


logger = logging.getLogger(__name__)

COMMANDS = 'shorten, expand, list, stats, clean, delete'


@dataclass
class Context:
    """Everything a command handler needs for one invocation."""

    dao: ShortURLBaseDAO
    store: StoreModel
    config: AppConfig


def out(message: str = '') -> None:
    print(message, file=sys.stdout)


def err(message: str) -> None:
    print(message, file=sys.stderr)


def save_store(context: Context) -> int:
    """Persist the store; a write failure is reported but doesn't undo the command's output"""
    try:
        context.dao.save(context.store)
    except StoreUnwritableError as e:
        logger.error('Failed to save store.', extra={'event': STORE_UNWRITABLE, 'error': str(e)})
        err(f'Warning: changes not saved ({e})')
        return 1
    return 0


def handle_shorten(args: argparse.Namespace, context: Context) -> int:
    title_fetcher = None
    if context.config['fetch_titles']:
        title_fetcher = functools.partial(fetch_title, timeout=context.config['title_timeout'])

    try:
        assignment = assign_code(
            context.store,
            args.url,
            args.code,
            generator=generator_for(context.config['code_strategy'], context.config['hash_salt']),
            default_length=context.config['default_code_length'],
            fetch_title=title_fetcher,
            title_max_length=context.config['title_max_length'],
        )
    except InvalidURLError:
        logger.info('Rejected invalid URL.', extra={'event': INVALID_URL, 'url': args.url})
        err('Invalid URL format')
        return 1
    except InvalidShortcodeError as e:
        logger.info('Rejected invalid custom code.', extra={'event': INVALID_SHORTCODE, 'shortcode': args.code})
        err(str(e))
        return 1
    except ShortURLAlreadyExistsError:
        logger.info('Custom code already taken.', extra={'event': SHORTCODE_TAKEN, 'shortcode': args.code})
        err(f"Code '{args.code}' already taken")
        return 1

    if not assignment.created:
        out(f'{assignment.shortcode} (exists)')
        return 0

    status = save_store(context)
    out(assignment.shortcode)
    if assignment.entry.title:
        out(f'Title: {assignment.entry.title}')
    return status


def handle_expand(args: argparse.Namespace, context: Context) -> int:
    try:
        entry = expand(context.store, args.code)
    except ShortURLNotFoundError:
        logger.info('Shortcode not found.', extra={'event': SHORTCODE_NOT_FOUND, 'shortcode': args.code})
        err(f"Error: Code '{args.code}' not found")
        return 1

    status = save_store(context)
    out(entry.target)
    if entry.title:
        out(f'Title: {entry.title}')
    out(f'Clicks: {entry.clicks}')
    return status


def handle_list(args: argparse.Namespace, context: Context) -> int:
    entries = list_entries(context.store)
    if not entries:
        out('No URLs stored')
        return 0

    out(f'Stored URLs ({len(entries)} total):')
    out()
    for shortcode, entry in entries:
        out(f'Code: {shortcode}')
        out(f'URL:  {entry.target}')
        if entry.title:
            out(f'Title: {entry.title}')
        out(f'Created: {display_time(entry.created_at)}')
        out(f'Clicks: {entry.clicks}')
        if entry.last_click is not None:
            out(f'Last clicked: {display_time(entry.last_click)}')
        out()
    return 0


def handle_stats(args: argparse.Namespace, context: Context) -> int:
    stats = compute_store_stats(context.store)
    out('URL Shortener Statistics')
    out('========================')
    out(f'Total URLs: {stats.total_urls}')
    out(f'Total clicks: {stats.total_clicks}')
    if stats.total_urls:
        out(f'Average clicks per URL: {stats.average_clicks:.1f}')
        out(f'Most clicked: {stats.most_clicked.shortcode} ({stats.most_clicked.clicks} clicks)')
        out(f'Oldest URL: {display_time(stats.oldest)}')
        out(f'Newest URL: {display_time(stats.newest)}')
    return 0


def handle_clean(args: argparse.Namespace, context: Context) -> int:
    days = context.config['cleanup_days']
    if not confirm(f'Clean unused URLs (0 clicks, older than {days} days)?'):
        out('Cancelled')
        return 0

    removed = clean(context.store, days=days)
    status = save_store(context)
    out(f'Removed {removed} unused URLs')
    return status


def handle_delete(args: argparse.Namespace, context: Context) -> int:
    entry = context.store.items.get(args.code)
    if entry is None:
        logger.info('Shortcode not found.', extra={'event': SHORTCODE_NOT_FOUND, 'shortcode': args.code})
        err(f"Error: Code '{args.code}' not found")
        return 1

    if not confirm(f"Delete '{args.code}' -> {entry.target}?"):
        out('Cancelled')
        return 0

    delete(context.store, args.code)
    status = save_store(context)
    out(f'Deleted {args.code}')
    return status


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='urlsh', description='Local command-line URL shortener.')
    parser.add_argument('--version', action='version', version=f'%(prog)s {VERSION}')
    parser.add_argument('--store', help='path of the JSON store file (default: $URLSH_STORE or ./urls.json)')
    parser.add_argument('--config', help='path of the JSON configuration file (default: $URLSH_CONFIG)')
    parser.add_argument('-v', '--verbose', action='store_true', help='enable debug logging')

    subparsers = parser.add_subparsers(dest='command', metavar='command')

    shorten_parser = subparsers.add_parser('shorten', aliases=['s'], help='shorten a URL')
    shorten_parser.add_argument('url', help='absolute http(s) URL')
    shorten_parser.add_argument('code', nargs='?', help='custom code (3-20 characters)')
    shorten_parser.set_defaults(handler=handle_shorten)

    expand_parser = subparsers.add_parser('expand', aliases=['e'], help='print the URL behind a code')
    expand_parser.add_argument('code')
    expand_parser.set_defaults(handler=handle_expand)

    list_parser = subparsers.add_parser('list', aliases=['l'], help='list stored URLs, newest first')
    list_parser.set_defaults(handler=handle_list)

    stats_parser = subparsers.add_parser('stats', help='show usage statistics')
    stats_parser.set_defaults(handler=handle_stats)

    clean_parser = subparsers.add_parser('clean', help='remove old URLs that were never clicked')
    clean_parser.set_defaults(handler=handle_clean)

    delete_parser = subparsers.add_parser('delete', aliases=['del', 'rm'], help='delete a code')
    delete_parser.add_argument('code')
    delete_parser.set_defaults(handler=handle_delete)

    return parser


def guarantee_clean_exit(func: Callable[..., int]) -> Callable[..., int]:
    """Decorator: turn unexpected errors into a one-line message and exit status 1"""

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> int:
        try:
            return func(*args, **kwargs)
        except ConfigurationError as e:
            logger.error('Invalid configuration.', extra={'event': e.error_code, 'error': str(e)})
            err(f'Error: {e}')
            return 1
        except KeyboardInterrupt:
            err('Cancelled')
            return 130
        except Exception:
            logger.exception('Unexpected error.', extra={'event': UNKNOWN_ERROR})
            err('Error: unexpected failure (run with --verbose for details)')
            return 1

    return wrapper


@guarantee_clean_exit
def main(argv: Sequence[str] | None = None) -> int:
    # 1- Parse arguments and initialize logging
    args = build_parser().parse_args(argv)
    initialize_logging('DEBUG' if args.verbose else None)

    if args.command is None:
        out(f'urlsh v{VERSION} - URL shortener')
        out(f'Commands: {COMMANDS}')
        return 0

    # 2- Load configuration and the store
    config = load_config(args.config)
    dao = ShortURLFileDAO(args.store or store_path())
    context = Context(dao=dao, store=dao.load(), config=config)
    logger.debug('Running command.', extra={'command': args.command, 'store': str(dao.path)})

    # 3- Run the command (each handler saves when it mutates the store)
    return args.handler(args, context)


def run() -> None:
    sys.exit(main())
