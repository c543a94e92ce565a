"""Binary IO utilities for .dat file parsing."""

from factorio_dat.io.reader import Reader
from factorio_dat.io.writer import Writer

__all__ = ['Reader', 'Writer']
