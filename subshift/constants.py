# -*- coding: utf-8 -*-
from __future__ import annotations


DEFAULT_ENCODING: str = 'utf-8'
DEFAULT_OUTPUT_ENCODING: str = 'utf-8'
INFER_ENCODING: str = 'infer'

# internal layout; the sub-second separator is always a dot here
TIMESTAMP_FORMAT: str = '%H:%M:%S.%f'
TIMESTAMP_ARROW: str = ' --> '
BYTE_ORDER_MARK: str = '\ufeff'

RESYNC_SUFFIX: str = '-resync'

PROJECT_NAME: str = 'subshift'
DESCRIPTION: str = 'Easily delay or advance time in any .srt subtitle file.'
