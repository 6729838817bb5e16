"""External tool wrappers (ShortReadAssembler).

- FastQC: raw read quality reports
- fastp: adapter and quality trimming
- SPAdes: de novo assembly
- Minimap2: read alignment for polishing
- Racon: consensus polishing
- seqtk: contig length filtering
- CheckM2: completeness/contamination scoring
- assembly-stats: contiguity statistics
"""

from shortreadassembler.external.assembly_stats import AssemblyStats
from shortreadassembler.external.base import ExternalTool
from shortreadassembler.external.checkm2 import CheckM2
from shortreadassembler.external.fastp import Fastp
from shortreadassembler.external.fastqc import FastQC
from shortreadassembler.external.minimap2 import Minimap2
from shortreadassembler.external.racon import Racon
from shortreadassembler.external.seqtk import Seqtk
from shortreadassembler.external.spades import Spades

__all__ = [
    "ExternalTool",
    "AssemblyStats",
    "CheckM2",
    "Fastp",
    "FastQC",
    "Minimap2",
    "Racon",
    "Seqtk",
    "Spades",
]
