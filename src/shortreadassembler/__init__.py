"""ShortReadAssembler: resumable batch assembly of paired-end short reads."""

from shortreadassembler.__version__ import __version__

__all__ = ["__version__"]
