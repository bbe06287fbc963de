import argparse
import sys

from huffproc.huff_exception import HuffException
from huffproc.huff_processor import HuffProcessor


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Huffman Compression/Decompression")
    parser.add_argument('-d', '--debug', type=int, default=0,
                        help="debug level, 1 for a summary, 4 to print every code")
    subparsers = parser.add_subparsers(dest='command', required=True)

    compress_parser = subparsers.add_parser('compress')
    compress_parser.add_argument('input')
    compress_parser.add_argument('output')

    decompress_parser = subparsers.add_parser('decompress')
    decompress_parser.add_argument('input')
    decompress_parser.add_argument('output')

    args = parser.parse_args(argv)

    try:
        if args.command == 'compress':
            log = HuffProcessor.compress_file(args.input, args.output, debug=args.debug)
        else:
            log = HuffProcessor.decompress_file(args.input, args.output, debug=args.debug)
    except HuffException as e:
        print(f"{args.input}: {e}", file=sys.stderr)
        return 1

    print(log)
    return 0


if __name__ == "__main__":
    sys.exit(main())
