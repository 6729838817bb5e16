"""Version information for ShortReadAssembler."""

__version__ = "1.0.0"
__license__ = "GPL-2.0"
__description__ = "Resumable short-read genome assembly pipeline (FastQC, fastp, SPAdes, Racon, CheckM2)"
