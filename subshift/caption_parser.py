# -*- coding: utf-8 -*-
from datetime import datetime
from enum import Enum
import logging
import re
from typing import Iterable, List, NamedTuple, Optional, Tuple

import chardet

from subshift.captions import Caption, CaptionFile, SubsMixin
from subshift.clock import day_zero, set_clock
from subshift.constants import BYTE_ORDER_MARK, DEFAULT_ENCODING, INFER_ENCODING, TIMESTAMP_FORMAT
from subshift.file_utils import open_file
from subshift.pipeline import TransformerMixin

logger: logging.Logger = logging.getLogger(__name__)

_INDEX_RE = re.compile(r'^\d+$', re.ASCII)
_TIMING_RE = re.compile(r'^(\d{1,2}:\d{2}:\d{2}[,.]\d+)\s*-->\s*(\d{1,2}:\d{2}:\d{2}[,.]\d+)$', re.ASCII)


class LineKind(Enum):
    INDEX = 'index'
    TIMING = 'timing'
    BLANK = 'blank'
    TEXT = 'text'


class ParserState(Enum):
    IDLE = 'idle'
    IN_TIMING = 'in_timing'
    IN_TEXT = 'in_text'


class Timing(NamedTuple):
    start: datetime
    end: datetime
    comma_separator: bool


class ParsedCaptions(NamedTuple):
    captions: List[Caption]
    comma_separator: bool
    # set when the input ended before the last caption's blank line
    unterminated: Optional[Caption]


def clean_line(line: str) -> str:
    return line.replace(BYTE_ORDER_MARK, '').strip()


def parse_timing(line: str, reference: datetime) -> Optional[Timing]:
    """
    Parse a ``00:00:05,000 --> 00:00:07,000`` line, or return None if the
    line is not one (it is then plain caption text).
    """
    m = _TIMING_RE.match(line)
    if m is None:
        return None
    stamps = m.group(1), m.group(2)
    comma_separator = any(',' in stamp for stamp in stamps)
    instants = []
    for stamp in stamps:
        try:
            parsed = datetime.strptime(stamp.replace(',', '.', 1), TIMESTAMP_FORMAT)
        except ValueError:
            return None
        instants.append(
            set_clock(reference, parsed.hour, parsed.minute, parsed.second, parsed.microsecond // 1000)
        )
    return Timing(instants[0], instants[1], comma_separator)


def classify_line(line: str, reference: datetime) -> Tuple[LineKind, Optional[Timing]]:
    if not line:
        return LineKind.BLANK, None
    if _INDEX_RE.match(line):
        return LineKind.INDEX, None
    timing = parse_timing(line, reference)
    if timing is not None:
        return LineKind.TIMING, timing
    return LineKind.TEXT, None


def parse_captions(lines: Iterable[str], reference: datetime) -> ParsedCaptions:
    captions: List[Caption] = []
    comma_separator = False
    state = ParserState.IDLE
    current: Optional[Caption] = None

    for raw_line in lines:
        line = clean_line(raw_line)
        kind, timing = classify_line(line, reference)
        if kind == LineKind.INDEX:
            current = Caption(line, reference, reference)
            state = ParserState.IN_TIMING
        elif kind == LineKind.TIMING:
            if current is None:
                current = Caption(u'', reference, reference)
            current.start = timing.start
            current.end = timing.end
            comma_separator = comma_separator or timing.comma_separator
            state = ParserState.IN_TEXT
        elif kind == LineKind.BLANK:
            if state != ParserState.IDLE:
                current.text = current.text.strip()
                captions.append(current)
            current = None
            state = ParserState.IDLE
        else:
            if current is None:
                current = Caption(u'', reference, reference)
            current.text += line + u'\n'
            state = ParserState.IN_TEXT

    unterminated = None
    if state != ParserState.IDLE:
        unterminated = current
        logger.debug('dropping caption %r: input ended before its blank line', current.index)
    return ParsedCaptions(captions, comma_separator, unterminated)


def split_lines(text: str) -> List[str]:
    """Split on newlines; a final newline does not make an extra blank line."""
    lines = text.split(u'\n')
    if lines and lines[-1] == u'':
        lines.pop()
    return lines


class CaptionParser(SubsMixin, TransformerMixin):
    def __init__(
        self,
        encoding: str = DEFAULT_ENCODING,
        reference: Optional[datetime] = None,
    ) -> None:
        super(CaptionParser, self).__init__()
        self.encoding: str = encoding
        self.reference: Optional[datetime] = reference
        self.fit_fname: Optional[str] = None
        self.detected_encoding_: Optional[str] = None
        self.unterminated_: Optional[Caption] = None

    def _decode(self, raw: bytes) -> Tuple[str, str]:
        encoding = self.encoding
        if encoding == INFER_ENCODING:
            encoding = chardet.detect(raw)['encoding'] or DEFAULT_ENCODING
            self.detected_encoding_ = encoding
            logger.info('detected encoding: %s', self.detected_encoding_)
        return raw.decode(encoding, errors='replace'), encoding

    def fit(self, fname, *_) -> 'CaptionParser':
        with open_file(fname, 'rb') as f:
            raw = f.read()
        text, encoding = self._decode(raw)
        reference = self.reference if self.reference is not None else day_zero()
        parsed = parse_captions(split_lines(text), reference)
        self.unterminated_ = parsed.unterminated
        self.subs_ = CaptionFile(
            parsed.captions,
            reference=reference,
            encoding=encoding,
            comma_separator=parsed.comma_separator,
        )
        self.fit_fname = '<stdin>' if fname is None else fname
        return self

    def transform(self, *_) -> CaptionFile:
        return self.subs_


def make_caption_parser(encoding: str = DEFAULT_ENCODING, **kwargs) -> CaptionParser:
    return CaptionParser(encoding=encoding, reference=kwargs.get('reference'))
