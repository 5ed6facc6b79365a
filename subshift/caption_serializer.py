# -*- coding: utf-8 -*-
from __future__ import annotations
from datetime import datetime
from typing import Iterable, TYPE_CHECKING

from subshift.constants import TIMESTAMP_ARROW

if TYPE_CHECKING:
    from subshift.captions import Caption


def format_timestamp(instant: datetime, comma_separator: bool = False) -> str:
    ret = '{:02d}:{:02d}:{:02d}.{:03d}'.format(
        instant.hour, instant.minute, instant.second, instant.microsecond // 1000
    )
    if comma_separator:
        # exactly one dot per timestamp: the one before the milliseconds
        ret = ret.replace('.', ',', 1)
    return ret


def compose_caption(caption: Caption, comma_separator: bool = False) -> str:
    return u'{}\n{}{}{}\n{}\n\n'.format(
        caption.index,
        format_timestamp(caption.start, comma_separator),
        TIMESTAMP_ARROW,
        format_timestamp(caption.end, comma_separator),
        caption.text,
    )


def compose(captions: Iterable[Caption], comma_separator: bool = False) -> str:
    """Render captions, in the given order, back into SubRip text."""
    return u''.join(compose_caption(caption, comma_separator) for caption in captions)
