#!/usr/bin/env python
# -*- coding: utf-8 -*-
from __future__ import annotations
import argparse
import logging
import os
import re
import sys
from typing import Any, Dict, List, Optional

from subshift.caption_parser import make_caption_parser
from subshift.caption_transformers import CaptionShifter
from subshift.constants import DEFAULT_ENCODING, DEFAULT_OUTPUT_ENCODING, DESCRIPTION, INFER_ENCODING
from subshift.file_utils import make_resync_filename
from subshift.pipeline import Pipeline
from subshift.shift_resolver import resolve_shift
from subshift.version import __version__

logger: logging.Logger = logging.getLogger(__name__)

_SHIFT_FLAGS = ('-t', '--time')
_NEGATIVE_SHIFT_RE = re.compile(r'-\s*[0-9]')

_EXAMPLES = """\
Use example:

Delay subtitle for 10 seconds
    subshift -f subtitle.srt -t 10

Delay subtitle for 1 minutes and 10 seconds
    subshift -f subtitle.srt -t 1:10

Advancing subtitle for 1 minutes and 10.5 seconds
    subshift -f subtitle.srt -t -1:10.5
"""


def make_pipeline_for_args(args: argparse.Namespace, shift) -> Pipeline:
    return Pipeline([
        ('parse', make_caption_parser(encoding=args.encoding)),
        ('shift', CaptionShifter(shift)),
    ])


def validate_args(args: argparse.Namespace) -> None:
    if args.output is not None and os.path.abspath(args.output) == os.path.abspath(args.file):
        raise ValueError(
            'output file is the input file ({}); refusing to run in case this was not intended'.format(args.file)
        )


def run(args: argparse.Namespace) -> Dict[str, Any]:
    result = {
        'retval': 0,
        'shift': None,
        'num_captions': None,
        'output': None,
    }
    if not args.file or not args.time:
        make_parser().print_help()
        return result
    try:
        validate_args(args)
        shift = resolve_shift(args.time)
    except ValueError as e:
        logger.error(e)
        result['retval'] = 1
        return result
    result['shift'] = shift
    output = args.output or make_resync_filename(args.file)
    logger.info('Processing %s', args.file)
    pipe = make_pipeline_for_args(args, shift)
    try:
        out_subs = pipe.fit_transform(args.file)
    except (OSError, LookupError) as e:
        logger.error('Error opening subtitle file: %s', e)
        result['retval'] = 1
        return result
    result['num_captions'] = len(out_subs)
    out_subs = out_subs.set_encoding(args.output_encoding)
    try:
        out_subs.write_file(output)
    except (OSError, LookupError, UnicodeError) as e:
        logger.error('Error creating new subtitle file: %s', e)
        result['retval'] = 1
        return result
    logger.info('Result has been saved as %s', output)
    result['output'] = output
    return result


def attach_shift_values(argv: List[str]) -> List[str]:
    """
    Glue a negative shift onto its flag (``-t -1:10.5`` -> ``--time=-1:10.5``)
    so that argparse does not read the value as another option.
    """
    glued = []
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg in _SHIFT_FLAGS and i + 1 < len(argv) and _NEGATIVE_SHIFT_RE.match(argv[i + 1]):
            glued.append('--time={}'.format(argv[i + 1]))
            i += 2
            continue
        glued.append(arg)
        i += 1
    return glued


def add_main_args_for_cli(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('-f', '--file', help='Subtitle file.')
    parser.add_argument(
        '-t', '--time',
        help="Time shift with format [[hh:]mm:]ss[.000]. Add '-' (minus) prefix to advance subtitles."
    )
    parser.add_argument('-o', '--output',
                        help='Output subtitle file (default=input name with a -resync suffix).')


def add_cli_only_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('-v', '--version', action='version',
                        version='{package} {version}'.format(package='subshift', version=__version__))
    parser.add_argument('--encoding', default=DEFAULT_ENCODING,
                        help='What encoding to use for reading input subtitles '
                             '(default=%s). Use "%s" to detect it.' % (DEFAULT_ENCODING, INFER_ENCODING))
    parser.add_argument('--output-encoding', default=DEFAULT_OUTPUT_ENCODING,
                        help='What encoding to use for writing output subtitles '
                             '(default=%s). Can indicate "same" to use same '
                             'encoding as that of the input.' % DEFAULT_OUTPUT_ENCODING)


def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=DESCRIPTION,
        epilog=_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    add_main_args_for_cli(parser)
    add_cli_only_args(parser)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    parser = make_parser()
    args = parser.parse_args(attach_shift_values(argv))
    return run(args)['retval']


if __name__ == "__main__":
    sys.exit(main())
