"""
Командная строка для LZ77 компрессора.
"""

import argparse
import sys
from typing import List, Optional

from lz77_compressor import LZ77Config, LZ77Error, WINDOW_SIZE, MIN_MATCH, MAX_MATCH
from archiver_lz77 import Archiver


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='lz77',
        description='LZ77 compressor',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Output format:
  Literal:    0x00 <byte>
  Reference:  0x01 <offset:u16 BE> <length:u16 BE>
  With --header the stream is prefixed by "LZ77R1" <window:u16 BE> <max match:u16 BE>.

Examples:
  lz77 -s "hello hello hello" -o hello.lz77
  lz77 -i input.txt -o compressed.lz77
  lz77 -d -i compressed.lz77 -o output.txt
  echo "test data" | lz77 > test.lz77
        """
    )

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument('-c', '--compress', dest='decompress', action='store_false',
                      help='Compress (default)')
    mode.add_argument('-d', '--decompress', dest='decompress', action='store_true',
                      help='Decompress')
    parser.set_defaults(decompress=False)

    source = parser.add_mutually_exclusive_group()
    source.add_argument('-i', '--input', help='Read input from FILE (default: stdin)')
    source.add_argument('-s', '--string', help='Use STRING as input')

    parser.add_argument('-o', '--output', help='Write output to FILE (default: stdout)')
    parser.add_argument('-w', '--window-size', type=int, default=WINDOW_SIZE,
                        help=f'Sliding window size in bytes (default: {WINDOW_SIZE})')
    parser.add_argument('-n', '--min-match', type=int, default=MIN_MATCH,
                        help=f'Minimum match length (default: {MIN_MATCH})')
    parser.add_argument('-m', '--max-match', type=int, default=MAX_MATCH,
                        help=f'Maximum match length (default: {MAX_MATCH})')
    parser.add_argument('--header', action='store_true',
                        help='Prefix compressed output with a container header')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Print compression statistics to stderr')

    return parser


def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = LZ77Config(args.window_size, args.min_match, args.max_match)
        archiver = Archiver(config=config, use_header=args.header, verbose=args.verbose)
        archiver.run(
            decompress=args.decompress,
            path=args.input,
            text=args.string,
            output=args.output,
        )

    except (LZ77Error, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
