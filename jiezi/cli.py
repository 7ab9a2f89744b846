"""
Command line interface for jiezi.

Usage:
    python -m jiezi.cli "我来到北京清华大学"
    python -m jiezi.cli -a "我来到北京清华大学"          # full enumeration
    python -m jiezi.cli -s "我来到北京清华大学"          # search mode
    python -m jiezi.cli -j "我来到北京清华大学"          # JSON with offsets
    echo "我来到北京清华大学" | python -m jiezi.cli      # read stdin
    python -m jiezi.cli build-seed data/dict.txt        # write dict.txt.json
    python -m jiezi.cli download --size big            # fetch dict.big.txt
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Optional

from jiezi import __version__
from jiezi.errors import JieziError
from jiezi.loader import build_seed, download_dictionary
from jiezi.script import ScriptMode
from jiezi.settings import DEBUG, DICT_PATH, DICT_URLS
from jiezi.tokenizer import Tokenizer


def main_build_seed(args: list) -> int:
    """CLI entry point for build-seed subcommand."""
    parser = argparse.ArgumentParser(
        description='Build the JSON trie seed for a text dictionary',
        prog='jiezi build-seed',
    )

    parser.add_argument(
        'dictionary',
        type=str,
        metavar='DICT',
        help='Dictionary file (WORD FREQ per line)',
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        metavar='PATH',
        help='Output seed path (default: DICT.json)',
    )

    parsed = parser.parse_args(args)

    t0 = time.perf_counter()
    try:
        seed = build_seed(parsed.dictionary, parsed.output)
    except (JieziError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"✅ Trie seed written to {seed} ({time.perf_counter() - t0:.1f}s)")
    return 0


def main_download(args: list) -> int:
    """CLI entry point for download subcommand."""
    parser = argparse.ArgumentParser(
        description='Download a full dictionary and build its trie seed',
        prog='jiezi download',
    )

    parser.add_argument(
        '--size',
        choices=sorted(DICT_URLS),
        default='normal',
        help='Dictionary to download (default: normal)',
    )

    parser.add_argument(
        '--output-dir', '-o',
        type=str,
        metavar='DIR',
        help='Target directory (default: the package data directory)',
    )

    parsed = parser.parse_args(args)

    t0 = time.perf_counter()
    try:
        path = download_dictionary(parsed.size, parsed.output_dir)
    except (JieziError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"✅ Dictionary saved to {path} ({time.perf_counter() - t0:.1f}s)")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Command line interface for Jiezi (Chinese word segmentation)',
        prog='jiezi',
        epilog=(
            'Subcommands:\n'
            '  jiezi build-seed DICT    Build the trie seed for a dictionary\n'
            '  jiezi download           Download the full dictionary'
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        'text',
        nargs='*',
        help='Text to segment (reads stdin when omitted or "-")',
    )

    parser.add_argument(
        '-a', '--cut-all',
        action='store_true',
        help='Full enumeration: print every dictionary word',
    )

    parser.add_argument(
        '-n', '--no-hmm',
        action='store_true',
        help='Do not send unknown runs to the fallback segmenter',
    )

    parser.add_argument(
        '-s', '--search',
        action='store_true',
        help='Search mode: add known bigrams and trigrams of long words',
    )

    parser.add_argument(
        '-c', '--cjk',
        action='store_true',
        help='Segment Hiragana/Katakana too (Hangul is passed through)',
    )

    parser.add_argument(
        '-d', '--dict',
        type=str,
        default=None,
        metavar='PATH',
        help=f'Main dictionary file (default: {DICT_PATH})',
    )

    parser.add_argument(
        '-u', '--user-dict',
        action='append',
        default=[],
        metavar='PATH',
        help='User dictionary file (WORD [FREQ] per line), repeatable',
    )

    parser.add_argument(
        '-D', '--delimiter',
        type=str,
        default=' / ',
        metavar='DELIM',
        help='Token delimiter (default: " / ")',
    )

    parser.add_argument(
        '-j', '--json',
        action='store_true',
        help='Print tokens with offsets as JSON',
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Log dictionary loading',
    )

    parser.add_argument(
        '-v', '--version',
        action='store_true',
        help='Show version information',
    )

    return parser


def format_line(tokenizer: Tokenizer, line: str, parsed) -> str:
    """Segment one line according to the CLI options."""
    hmm = not parsed.no_hmm
    if parsed.json:
        mode = 'search' if parsed.search else 'default'
        return tokenizer.analyze(line, mode=mode, hmm=hmm).model_dump_json()
    if parsed.search:
        words = tokenizer.lcut_for_search(line, hmm=hmm)
    else:
        words = tokenizer.lcut(line, cut_all=parsed.cut_all, hmm=hmm)
    return parsed.delimiter.join(words)


def main(args: Optional[list] = None) -> int:
    """Main CLI entry point."""
    args_list = args if args is not None else sys.argv[1:]

    if args_list and args_list[0] == 'build-seed':
        return main_build_seed(args_list[1:])
    if args_list and args_list[0] == 'download':
        return main_download(args_list[1:])

    parser = build_parser()
    parsed = parser.parse_args(args_list)

    if parsed.version:
        print(f'jiezi {__version__}')
        return 0

    if parsed.verbose or DEBUG:
        logging.basicConfig(level=logging.DEBUG if DEBUG else logging.INFO,
                            format='%(levelname)s %(name)s: %(message)s')

    # Get input text
    if parsed.text and parsed.text != ['-']:
        lines = [' '.join(parsed.text)]
    elif not sys.stdin.isatty():
        lines = [line.rstrip('\n') for line in sys.stdin]
    else:
        parser.print_help()
        return 1

    mode = ScriptMode.CJK if parsed.cjk else None
    tokenizer = Tokenizer(Path(parsed.dict) if parsed.dict else None, mode=mode)

    try:
        tokenizer.initialize()
        for path in parsed.user_dict:
            tokenizer.load_userdict(path)
    except JieziError as e:
        print(f'Error loading dictionary: {e}', file=sys.stderr)
        return 1

    try:
        for line in lines:
            print(format_line(tokenizer, line, parsed))
        return 0
    except Exception as e:
        print(f'Error processing text: {e}', file=sys.stderr)
        import traceback
        traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
