"""
Command line entry point.

Usage:
    nomenclator --keycount 500 --db keys.db
    nomenclator --keycount 20 --jsonout --json keys.json
    nomenclator --name-source http://localhost:8080/name

Environment Variables:
    NOMENCLATOR_ENV: configuration profile (local, remote, testing, default)
    NOMENCLATOR_DB, NOMENCLATOR_LOG, NOMENCLATOR_KEY_COUNT, NOMENCLATOR_JSON_OUT,
    NOMENCLATOR_JSON, NOMENCLATOR_NAME_SOURCE_URL: defaults for the flags below
"""
import argparse
import logging
import os
import signal
import sys

from .app import configure_logging, create_orchestrator
from .config import config
from .errors import NomenclatorError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='nomenclator',
        description='Generate unique names, pair each with a 32-byte secret key, and store the pairs.'
    )
    parser.add_argument('--config', choices=sorted(config), default=os.getenv('NOMENCLATOR_ENV', 'default'),
                        help='configuration profile')
    parser.add_argument('--db', help='database file')
    parser.add_argument('--log', help='log file')
    parser.add_argument('--keycount', type=int, help='number of keys to generate')
    parser.add_argument('--jsonout', action='store_true', default=None, help='also write the pairs to JSON')
    parser.add_argument('--json', help='JSON file')
    parser.add_argument('--name-source', help='URL of a remote name service (replaces the word lists)')
    parser.add_argument('--adjectives', help='adjective word list')
    parser.add_argument('--nouns', help='noun word list')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.keycount is not None and args.keycount < 0:
        print("--keycount must not be negative")
        return 2

    cfg = config[args.config](
        database_file=args.db,
        log_file=args.log,
        key_count=args.keycount,
        json_out=args.jsonout,
        json_file=args.json,
        name_source_url=args.name_source,
        adjectives_file=args.adjectives,
        nouns_file=args.nouns
    )

    try:
        handler = configure_logging(cfg.LOG_FILE)
    except OSError as e:
        print(e)
        return 1

    try:
        return _run(cfg)
    finally:
        logging.getLogger('nomenclator').removeHandler(handler)
        handler.close()


def _run(cfg) -> int:
    try:
        orchestrator = create_orchestrator(cfg)
    except (OSError, ValueError, NomenclatorError) as e:
        logger.error(f"Startup failed: {e}")
        print(e)
        return 1

    def request_stop(signum, frame):
        logger.info(f"Received signal {signum}, stopping after the current pair")
        orchestrator.stop()

    previous = {sig: signal.signal(sig, request_stop) for sig in (signal.SIGINT, signal.SIGTERM)}

    mode = 'remote name source' if cfg.use_name_source else 'embedded local mode'
    logger.info(f"Starting nomenclator ({mode})")
    try:
        result = orchestrator.run()
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)
        orchestrator.close()
    logger.info("Stopping nomenclator")

    if orchestrator.pairs is not None:
        try:
            orchestrator.pairs.save_json(cfg.JSON_FILE)
        except OSError as e:
            logger.error(f"JSON export failed: {e}")
            print(e)
            return 1

    if result.exit_code:
        return result.exit_code

    print("Complete")
    return 0


if __name__ == '__main__':
    sys.exit(main())
