# -*- coding: utf-8 -*-
"""
Turns a human friendly shift expression such as ``10``, ``1:10``,
``-1:10.5`` or ``+0:0:5.250`` into a signed :class:`datetime.timedelta`.

Layouts are tried shortest first and the first one that matches wins, so a
bare ``10`` is read as seconds rather than rejected by an ``H:M:S`` reading.
"""
from __future__ import annotations
from datetime import timedelta
import logging
import re
from typing import List, NamedTuple, Optional

logger: logging.Logger = logging.getLogger(__name__)

_FIELD = r'\d{1,2}'
_FRACTION = r'\.(?P<fraction>\d+)'


class ShiftExpressionError(ValueError):
    def __init__(self, expression: str) -> None:
        super(ShiftExpressionError, self).__init__('shift time ({}) not recognized'.format(expression))
        self.expression = expression


class ShiftLayout(NamedTuple):
    name: str
    pattern: re.Pattern

    def match(self, expression: str) -> Optional[timedelta]:
        m = self.pattern.fullmatch(expression)
        if m is None:
            return None
        fields = m.groupdict()
        hour = int(fields.get('hour') or 0)
        minute = int(fields.get('minute') or 0)
        second = int(fields['second'])
        if hour > 23 or minute > 59 or second > 59:
            return None
        fraction = fields.get('fraction') or ''
        millisecond = int((fraction + '000')[:3])
        return timedelta(hours=hour, minutes=minute, seconds=second, milliseconds=millisecond)


def _layout(name: str, *fields: str, fractional: bool = False) -> ShiftLayout:
    regex = ':'.join('(?P<{}>{})'.format(field, _FIELD) for field in fields)
    if fractional:
        regex += _FRACTION
    return ShiftLayout(name, re.compile(regex, re.ASCII))


SHIFT_LAYOUTS: List[ShiftLayout] = [
    _layout('S', 'second'),
    _layout('M:S', 'minute', 'second'),
    _layout('H:M:S', 'hour', 'minute', 'second'),
    _layout('S.f', 'second', fractional=True),
    _layout('M:S.f', 'minute', 'second', fractional=True),
    _layout('H:M:S.f', 'hour', 'minute', 'second', fractional=True),
]


def _split_sign(expression: str):
    trimmed = expression.strip()
    if trimmed.startswith('-'):
        return -1, trimmed.lstrip('- ')
    elif trimmed.startswith('+'):
        return 1, trimmed.lstrip('+ ')
    return 1, trimmed


def resolve_shift(expression: str) -> timedelta:
    sign, unsigned = _split_sign(expression)
    for layout in SHIFT_LAYOUTS:
        td = layout.match(unsigned)
        if td is not None:
            logger.debug('shift expression %r matched layout %s', expression, layout.name)
            return -td if sign < 0 else td
    raise ShiftExpressionError(expression)


def format_shift(td: timedelta) -> str:
    sign = '-' if td < timedelta(0) else '+'
    total_ms = abs(td) // timedelta(milliseconds=1)
    seconds, ms = divmod(total_ms, 1000)
    minutes, seconds = divmod(seconds, 60)
    hours, minutes = divmod(minutes, 60)
    return '{}{}:{:02d}:{:02d}.{:03d}'.format(sign, hours, minutes, seconds, ms)
