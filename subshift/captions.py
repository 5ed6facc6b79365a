# -*- coding: utf-8 -*-
from __future__ import annotations
from datetime import datetime, timedelta
import logging
from typing import Any, Iterator, List, Optional

from subshift.caption_serializer import compose, format_timestamp
from subshift.clock import reproject
from subshift.file_utils import open_file

logger: logging.Logger = logging.getLogger(__name__)


class SubsMixin:
    def __init__(self, subs: Optional[CaptionFile] = None) -> None:
        self.subs_: Optional[CaptionFile] = subs

    def set_encoding(self, encoding: str) -> SubsMixin:
        self.subs_.set_encoding(encoding)
        return self


class Caption:
    def __init__(self, index: str, start: datetime, end: datetime, text: str = u'') -> None:
        self.index = index
        self.start = start
        self.end = end
        self.text = text

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Caption):
            return False
        eq = True
        eq = eq and self.index == other.index
        eq = eq and self.start == other.start
        eq = eq and self.end == other.end
        eq = eq and self.text == other.text
        return eq

    def __repr__(self) -> str:
        return 'Caption(index={!r}, start={}, end={}, text={!r})'.format(
            self.index, format_timestamp(self.start), format_timestamp(self.end), self.text
        )

    def shifted(self, td: timedelta, reference: datetime) -> Caption:
        return self.__class__(
            self.index,
            _shift_instant(self.start, td, reference),
            _shift_instant(self.end, td, reference),
            self.text,
        )


def _shift_instant(instant: datetime, td: timedelta, reference: datetime) -> datetime:
    ret = instant + td
    if ret < reference:
        # an advance past the start of the day clamps to day zero
        return reference
    return reproject(reference, ret)


class CaptionFile:
    """
    The captions of one subtitle file together with everything a run needs
    to write them back: the reference (day zero) instant every timestamp is
    anchored to, whether the source used commas before the milliseconds,
    and the output encoding.
    """

    def __init__(self, captions: List[Caption], *_, **kwargs: Any) -> None:
        reference: Optional[datetime] = kwargs.pop('reference', None)
        if reference is None:
            raise ValueError('reference must be specified')
        encoding: Optional[str] = kwargs.pop('encoding', None)
        if encoding is None:
            raise ValueError('encoding must be specified')
        self.captions_: List[Caption] = captions
        self._reference: datetime = reference
        self._encoding: str = encoding
        self._comma_separator: bool = kwargs.pop('comma_separator', False)

    @property
    def reference(self) -> datetime:
        return self._reference

    @property
    def encoding(self) -> str:
        return self._encoding

    @property
    def comma_separator(self) -> bool:
        return self._comma_separator

    def set_encoding(self, encoding: str) -> CaptionFile:
        if encoding != 'same':
            self._encoding = encoding
        return self

    def __len__(self) -> int:
        return len(self.captions_)

    def __getitem__(self, item: int) -> Caption:
        return self.captions_[item]

    def __iter__(self) -> Iterator[Caption]:
        return iter(self.captions_)

    def clone_props_for_captions(self, new_captions: List[Caption]) -> CaptionFile:
        return CaptionFile(
            new_captions,
            reference=self._reference,
            encoding=self._encoding,
            comma_separator=self._comma_separator,
        )

    def offset(self, td: timedelta) -> CaptionFile:
        offset_captions = []
        for caption in self.captions_:
            offset_captions.append(caption.shifted(td, self._reference))
        return self.clone_props_for_captions(offset_captions)

    def to_string(self) -> str:
        return compose(self.captions_, comma_separator=self._comma_separator)

    def write_file(self, fname) -> None:
        to_write = self.to_string().encode(self._encoding)
        with open_file(fname, 'wb') as f:
            f.write(to_write)
