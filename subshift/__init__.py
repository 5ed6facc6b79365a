# -*- coding: utf-8 -*-
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

# configure logging here so that the submodules' loggers share one handler
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(console=Console(file=sys.stderr))],
)

from .version import __version__  # noqa
from .subshift import main  # noqa
