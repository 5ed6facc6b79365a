# -*- coding: utf-8 -*-
from datetime import datetime, timedelta
from io import BytesIO
import re

import pytest

from subshift.caption_parser import (
    CaptionParser,
    LineKind,
    classify_line,
    parse_captions,
    split_lines,
)
from subshift.caption_serializer import compose, format_timestamp
from subshift.caption_transformers import CaptionShifter
from subshift.captions import Caption, CaptionFile
from subshift.clock import set_clock
from subshift.pipeline import make_pipeline

REFERENCE = datetime(2020, 1, 1)

comma_srt = u"""1
00:00:00,178 --> 00:00:01,416
<i>Previously on "Your favorite TV show..."</i>

2
00:00:01,828 --> 00:00:04,549
Oh hi, Mark.

3
00:00:04,653 --> 00:00:03,062
You are tearing me apart, Lisa!
Second line.

"""

dot_srt = re.sub(r'(\d),(\d)', r'\1.\2', comma_srt)


def at(hour, minute, second, millisecond):
    return set_clock(REFERENCE, hour, minute, second, millisecond)


def fit_parser(text, encoding='utf-8'):
    parser = CaptionParser(encoding=encoding, reference=REFERENCE)
    parser.fit(BytesIO(text.encode(encoding)))
    return parser


def test_parse_captions_fields():
    subs = fit_parser(comma_srt).subs_
    assert len(subs) == 3
    assert subs[0] == Caption('1', at(0, 0, 0, 178), at(0, 0, 1, 416),
                              u'<i>Previously on "Your favorite TV show..."</i>')
    assert subs[2].text == u'You are tearing me apart, Lisa!\nSecond line.'
    # no start <= end invariant
    assert subs[2].end < subs[2].start
    assert [sub.index for sub in subs] == ['1', '2', '3']


@pytest.mark.parametrize('text, expected', [(comma_srt, True), (dot_srt, False)])
def test_decimal_separator_detected(text, expected):
    assert fit_parser(text).subs_.comma_separator is expected


def test_comma_anywhere_sets_flag_for_whole_file():
    mixed = dot_srt.replace('00:00:04.653', '00:00:04,653')
    subs = fit_parser(mixed).subs_
    assert subs.comma_separator
    assert subs.to_string() == comma_srt


@pytest.mark.parametrize('text', [comma_srt, dot_srt])
def test_zero_shift_round_trips(text):
    parser = fit_parser(text)
    shifted = CaptionShifter(0).fit_transform(parser.subs_)
    assert list(shifted) == list(parser.subs_)
    assert shifted.to_string() == text


def test_concrete_delay_keeps_comma():
    subs = fit_parser(u'1\n00:00:05,000 --> 00:00:07,000\nHello\n\n').subs_
    shifted = CaptionShifter('10').fit_transform(subs)
    assert shifted.to_string() == u'1\n00:00:15,000 --> 00:00:17,000\nHello\n\n'


def test_concrete_advance_clamps_both_fields():
    subs = fit_parser(u'1\n00:00:05,000 --> 00:00:07,000\nHello\n\n').subs_
    shifted = CaptionShifter('-10').fit_transform(subs)
    assert shifted.to_string() == u'1\n00:00:00,000 --> 00:00:00,000\nHello\n\n'


def test_start_and_end_clamp_independently():
    subs = CaptionFile([Caption('1', at(0, 0, 8, 0), at(0, 0, 3, 0), u'x')], reference=REFERENCE, encoding='utf-8')
    shifted = CaptionShifter(-5).fit_transform(subs)
    assert shifted[0].start == at(0, 0, 3, 0)
    assert shifted[0].end == REFERENCE


@pytest.mark.parametrize('seconds', [-3600, -4.5, -1, 0, 1, 2.25, 86399])
def test_no_timestamp_before_zero(seconds):
    shifted = CaptionShifter(seconds).fit_transform(fit_parser(comma_srt).subs_)
    for sub in shifted:
        assert sub.start >= REFERENCE
        assert sub.end >= REFERENCE
        assert sub.start.date() == REFERENCE.date()


@pytest.mark.parametrize('expression', ['1', '0.177', '1:10.5', '0:0:0.001'])
def test_sign_symmetry_when_nothing_clamps(expression):
    subs = fit_parser(comma_srt).subs_
    delayed = CaptionShifter(expression).fit_transform(subs)
    restored = CaptionShifter('-' + expression).fit_transform(delayed)
    assert list(restored) == list(subs)


def test_shift_past_midnight_wraps_to_same_day():
    subs = CaptionFile([Caption('1', at(23, 59, 55, 0), at(23, 59, 58, 500), u'late')],
                       reference=REFERENCE, encoding='utf-8')
    shifted = CaptionShifter(timedelta(seconds=10)).fit_transform(subs)
    assert shifted[0].start == at(0, 0, 5, 0)
    assert shifted[0].end == at(0, 0, 8, 500)


def test_shift_preserves_order_and_props():
    subs = fit_parser(comma_srt).subs_
    shifted = CaptionShifter(timedelta(minutes=1)).fit_transform(subs)
    assert [sub.index for sub in shifted] == [sub.index for sub in subs]
    assert [sub.text for sub in shifted] == [sub.text for sub in subs]
    assert shifted.reference == subs.reference
    assert shifted.comma_separator == subs.comma_separator
    assert shifted.encoding == subs.encoding


def test_unterminated_trailing_caption_is_dropped():
    text = u'1\n00:00:01,000 --> 00:00:02,000\nHi\n\n2\n00:00:03,000 --> 00:00:04,000\nBye\n'
    parser = fit_parser(text)
    assert [sub.index for sub in parser.subs_] == ['1']
    assert parser.unterminated_ is not None
    assert parser.unterminated_.index == '2'
    assert parser.unterminated_.text.strip() == u'Bye'


def test_terminated_file_has_no_unterminated_caption():
    assert fit_parser(comma_srt).unterminated_ is None


def test_byte_order_mark_is_stripped():
    raw = b'\xef\xbb\xbf' + u'1\n00:00:01.000 --> 00:00:02.000\nHi\n\n'.encode('utf-8')
    parser = CaptionParser(reference=REFERENCE)
    parser.fit(BytesIO(raw))
    assert parser.subs_[0].index == '1'
    assert parser.subs_[0].start == at(0, 0, 1, 0)


def test_crlf_and_surrounding_whitespace():
    text = u'1\r\n  00:00:01,000 --> 00:00:02,000  \r\n  Hi  \r\n\r\n'
    subs = fit_parser(text).subs_
    assert subs[0] == Caption('1', at(0, 0, 1, 0), at(0, 0, 2, 0), u'Hi')


@pytest.mark.parametrize('line', [
    u'00:00:01,000 -> 00:00:02,000',
    u'00:00:99,000 --> 00:00:02,000',
    u'00:00:01 --> 00:00:02',
    u'25:00:01,000 --> 00:00:02,000',
])
def test_malformed_timing_line_is_text(line):
    kind, timing = classify_line(line, REFERENCE)
    assert kind == LineKind.TEXT
    assert timing is None
    subs = fit_parser(u'1\n{}\nHi\n\n'.format(line)).subs_
    assert subs[0].text == u'{}\nHi'.format(line)
    assert subs[0].start == REFERENCE


@pytest.mark.parametrize('line, kind', [
    (u'', LineKind.BLANK),
    (u'42', LineKind.INDEX),
    (u'00:00:01,000 --> 00:00:02,000', LineKind.TIMING),
    (u'00:00:01.5 --> 00:00:02.25', LineKind.TIMING),
    (u'Hello 42', LineKind.TEXT),
])
def test_classify_line(line, kind):
    assert classify_line(line, REFERENCE)[0] == kind


def test_short_milliseconds_are_decimal_fractions():
    subs = fit_parser(u'1\n00:00:01.5 --> 00:00:02.25\nHi\n\n').subs_
    assert subs[0].start == at(0, 0, 1, 500)
    assert subs[0].end == at(0, 0, 2, 250)


def test_extra_blank_lines_do_not_duplicate_captions():
    text = u'\n\n1\n00:00:01,000 --> 00:00:02,000\nHi\n\n\n\n2\n00:00:03,000 --> 00:00:04,000\nBye\n\n\n'
    subs = fit_parser(text).subs_
    assert [sub.index for sub in subs] == ['1', '2']


def test_index_line_resets_open_caption():
    text = u'1\n00:00:01,000 --> 00:00:02,000\nlost\n2\n00:00:03,000 --> 00:00:04,000\nkept\n\n'
    subs = fit_parser(text).subs_
    assert len(subs) == 1
    assert subs[0].index == '2'
    assert subs[0].text == u'kept'


def test_text_without_index_opens_caption():
    result = parse_captions([u'stray', u''], REFERENCE)
    assert result.captions == [Caption(u'', REFERENCE, REFERENCE, u'stray')]
    assert result.unterminated is None


def test_split_lines_like_a_line_scanner():
    assert split_lines(u'a\nb\n') == [u'a', u'b']
    assert split_lines(u'a\nb\n\n') == [u'a', u'b', u'']
    assert split_lines(u'') == []


def test_infer_encoding():
    text = u'1\n00:00:01,000 --> 00:00:02,000\nÇa va? Très bien, déjà vu à Noël.\n\n' * 5
    parser = CaptionParser(encoding='infer', reference=REFERENCE)
    parser.fit(BytesIO(text.encode('utf-8')))
    assert parser.detected_encoding_ is not None
    assert parser.subs_.encoding == parser.detected_encoding_
    assert parser.subs_[0].text == u'Ça va? Très bien, déjà vu à Noël.'


@pytest.mark.parametrize('encoding', ['utf-8', 'latin-1'])
def test_same_encoding(encoding):
    parser = CaptionParser(encoding=encoding, reference=REFERENCE)
    shifter = CaptionShifter(1)
    pipe = make_pipeline(parser, shifter)
    pipe.fit(BytesIO(comma_srt.encode(encoding)))
    assert parser.subs_.encoding == encoding
    assert shifter.subs_.encoding == parser.subs_.encoding
    assert shifter.subs_.set_encoding('same').encoding == encoding
    assert shifter.subs_.set_encoding('utf-8').encoding == 'utf-8'
    assert shifter.set_encoding('latin-1').subs_.encoding == 'latin-1'


def test_write_file(tmp_path):
    out = tmp_path / 'out.srt'
    subs = fit_parser(comma_srt).subs_
    subs.write_file(str(out))
    assert out.read_bytes() == comma_srt.encode('utf-8')


def test_caption_file_requires_reference_and_encoding():
    with pytest.raises(ValueError):
        CaptionFile([], encoding='utf-8')
    with pytest.raises(ValueError):
        CaptionFile([], reference=REFERENCE)


@pytest.mark.parametrize('comma, expected', [(False, '01:02:03.004'), (True, '01:02:03,004')])
def test_format_timestamp(comma, expected):
    assert format_timestamp(at(1, 2, 3, 4), comma) == expected


def test_compose_keeps_order():
    captions = [
        Caption('2', at(0, 0, 2, 0), at(0, 0, 3, 0), u'b'),
        Caption('1', at(0, 0, 0, 0), at(0, 0, 1, 0), u'a'),
    ]
    assert compose(captions) == (
        u'2\n00:00:02.000 --> 00:00:03.000\nb\n\n'
        u'1\n00:00:00.000 --> 00:00:01.000\na\n\n'
    )


@pytest.mark.parametrize('body', [u'١٢٣', u'१२३', u'１２３'])
def test_non_ascii_digit_body_stays_text(body):
    subs = fit_parser(u'1\n00:00:01,000 --> 00:00:02,000\n{}\n\n'.format(body)).subs_
    assert subs[0] == Caption('1', at(0, 0, 1, 0), at(0, 0, 2, 0), body)
    assert classify_line(body, REFERENCE)[0] == LineKind.TEXT


def test_non_ascii_digit_timing_is_text():
    line = u'٠٠:٠٠:٠١,٠٠٠ --> ٠٠:٠٠:٠٢,٠٠٠'
    assert classify_line(line, REFERENCE)[0] == LineKind.TEXT
