# -*- coding: utf-8 -*-
from __future__ import annotations
from datetime import timedelta
import logging
import numbers
from typing import Union

from subshift.captions import CaptionFile, SubsMixin
from subshift.pipeline import TransformerMixin
from subshift.shift_resolver import format_shift, resolve_shift

logger: logging.Logger = logging.getLogger(__name__)


class CaptionShifter(SubsMixin, TransformerMixin):
    """
    Moves every caption by the same signed amount. Timestamps that would land
    before the start of the day are clamped to 00:00:00.000, start and end
    independently.
    """

    def __init__(self, shift: Union[timedelta, numbers.Real, str]) -> None:
        super(CaptionShifter, self).__init__()
        if isinstance(shift, timedelta):
            self.td = shift
        elif isinstance(shift, str):
            self.td = resolve_shift(shift)
        else:
            self.td = timedelta(seconds=shift)

    def fit(self, subs: CaptionFile, *_) -> CaptionShifter:
        logger.info('Shifting by: %s', format_shift(self.td))
        self.subs_ = subs.offset(self.td)
        return self

    def transform(self, *_) -> CaptionFile:
        return self.subs_
