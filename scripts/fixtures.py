import argparse
import logging
import os
import subprocess
import sys

import archive
import expectations
import generate

logger = logging.getLogger(__name__)

DEFAULT_RECIPE = "attributes_baseline"
FIXTURES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "fixtures")
LOG_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "fixtures.log")

# Command handlers
def handle_generate(args):
    if args.all and len(args.fixture) == 0:
        generate.generate_all_fixtures(args.force)
    elif args.all:
        print("list of fixtures is not allowed when the --all switch is present")
        return 2
    else:
        generate.generate_fixtures(args.fixture or [DEFAULT_RECIPE], args.force)
    return 0

def handle_check(args):
    for name in args.fixture or [DEFAULT_RECIPE]:
        recipe = generate.import_recipe(name)
        if recipe is None:
            return 1
        paths = getattr(recipe, 'BASELINE_PATHS', None)
        if paths is None:
            logger.warning(f"recipe `{name}` has no BASELINE_PATHS to check against")
            print(f"{name}: nothing to check, recipe has no BASELINE_PATHS", file=sys.stderr)
            return 1
        records = expectations.validate(getattr(recipe, 'WORKSPACE', name), paths)
        print(f"{name}: {len(records)} records ok")
    return 0

def handle_pack(args):
    archive.pack_fixtures(".", force=args.force)
    return 0

def handle_unpack(args):
    archive.unpack_fixtures(".", force=args.force)
    return 0

def setup_logging(log_path=LOG_PATH):
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    file_handler = logging.FileHandler(log_path, mode='w')
    file_handler.setLevel(logging.DEBUG)
    file_formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s | %(message)s")
    file_handler.setFormatter(file_formatter)
    root.addHandler(file_handler)
    return file_handler

def build_parser():
    parser = argparse.ArgumentParser(description="generate git attribute baseline fixtures")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser("generate", help="generate fixtures and record their baselines")
    generate_parser.add_argument("fixture", nargs='*')
    generate_parser.add_argument("-a", "--all", action="store_true", help="generate all fixtures")
    generate_parser.add_argument("-f", "--force", action="store_true", help="overwrite existing fixtures")
    generate_parser.set_defaults(handler=handle_generate)

    check_parser = subparsers.add_parser("check", help="validate recorded baselines")
    check_parser.add_argument("fixture", nargs='*')
    check_parser.set_defaults(handler=handle_check)

    pack_parser = subparsers.add_parser("pack", help="make archives from fixture directories")
    pack_parser.add_argument("-f", "--force", action="store_true", help="overwrite existing archives")
    pack_parser.set_defaults(handler=handle_pack)

    unpack_parser = subparsers.add_parser("unpack", help="make fixture directories from archives")
    unpack_parser.add_argument("-f", "--force", action="store_true", help="overwrite existing directories")
    unpack_parser.set_defaults(handler=handle_unpack)

    return parser

def main(argv=None, fixtures_dir=FIXTURES_DIR):
    '''Runs the command named in `argv` inside `fixtures_dir` and returns the exit status.'''

    args = build_parser().parse_args(argv)
    logger.info(f"args: {args}")

    # Switch to fixtures directory
    os.makedirs(fixtures_dir, exist_ok=True)
    current_dir = os.getcwd()
    os.chdir(fixtures_dir)
    try:
        return args.handler(args)
    except subprocess.CalledProcessError as error:
        logger.exception(f"command failed: `{error.cmd}`")
        print(f"command failed with status {error.returncode}: {error.cmd}", file=sys.stderr)
        return error.returncode
    except (OSError, expectations.BaselineError) as error:
        logger.exception("fixture generation failed")
        print(f"error: {error}", file=sys.stderr)
        return 1
    finally:
        os.chdir(current_dir)

if __name__ == "__main__":
    setup_logging()
    sys.exit(main())
