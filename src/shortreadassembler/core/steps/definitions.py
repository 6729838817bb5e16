"""Canonical stage ordering and user-facing metadata."""

from __future__ import annotations

from shortreadassembler.core.pipeline_types import Stage


FASTQC = Stage("fastqc", "fastqc", "FastQC on raw reads")
TRIM = Stage("trim", "trim", "Adapter and quality trimming with fastp")
ASSEMBLE = Stage("assemble", "assemble", "De novo assembly with SPAdes")
COMBINE_READS = Stage("combine_reads", "combine_reads", "Pool trimmed mates for polishing")
FILTER = Stage("filter", "filter", "Drop short contigs with seqtk")
FINALIZE = Stage("finalize", "finalize", "Copy assembly to the final directory")
CHECKM2 = Stage(
    "checkm2",
    "checkm2",
    "CheckM2 quality of all final assemblies",
    scope="batch",
    completion="up_to_date",
)
ASSEMBLY_STATS = Stage(
    "assembly_stats",
    "assembly_stats",
    "assembly-stats over all final assemblies",
    scope="batch",
    completion="up_to_date",
)


def align_stage(round_number: int) -> Stage:
    """Read alignment for one polishing round (ephemeral output)."""
    return Stage(
        f"align_round_{round_number}",
        "align",
        f"minimap2 alignment, polishing round {round_number}",
        verify_outputs=False,
        round=round_number,
    )


def polish_stage(round_number: int) -> Stage:
    """Racon consensus for one polishing round."""
    return Stage(
        f"polish_round_{round_number}",
        "polish",
        f"Racon polishing round {round_number}",
        verify_outputs=False,
        round=round_number,
    )


SAMPLE_STAGES: list[Stage] = [FASTQC, TRIM, ASSEMBLE]
POST_POLISH_STAGES: list[Stage] = [FILTER, FINALIZE]
BATCH_STAGES: list[Stage] = [CHECKM2, ASSEMBLY_STATS]


def pipeline_stages(racon_rounds: int) -> list[Stage]:
    """Full per-sample stage order followed by the batch stages."""
    polishing: list[Stage] = []
    if racon_rounds > 0:
        polishing.append(COMBINE_READS)
        for k in range(1, racon_rounds + 1):
            polishing.extend([align_stage(k), polish_stage(k)])
    return SAMPLE_STAGES + polishing + POST_POLISH_STAGES + BATCH_STAGES
