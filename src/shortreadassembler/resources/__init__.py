"""Resource files and configuration templates."""


def get_default_config() -> str:
    """Return default configuration YAML content."""
    return """# ShortReadAssembler Configuration File

# Paired-end reads: <ID>_R1.fastq.gz / <ID>_R2.fastq.gz
input_dir: "00_reads"
# Stage directories (01_fastqc ... 04_final_assemblies) and failed.txt go here
output_dir: "."
forward_suffix: "_R1.fastq.gz"
reverse_suffix: "_R2.fastq.gz"

# Runtime settings
runtime:
  log_level: "WARNING"
  log_file: ~
  tool_timeout: ~          # seconds per tool call; ~ waits indefinitely
  missing_pair_policy: "fail"   # fail | skip
  enable_progress: true

# Performance settings (large servers used threads: 120)
performance:
  threads: 8
  spades_threads: 6
  memory_gb: 200

# Stage parameters
tools:
  length_filter: 500       # minimum contig length kept by seqtk
  racon_rounds: 2
  minimap2_preset: "sr"
  checkm2_database: ~      # e.g. /path/to/CheckM2_database/uniref100.KO.1.dmnd
  skip_checkm2: false
"""
