"""Process exit codes of a ShortReadAssembler run.

Per-sample failures never change the exit code; they are listed in
``failed.txt`` and the run still exits 0. Only batch-level problems (bad
configuration, unpaired reads under the ``fail`` policy, missing tools, a
failed CheckM2 or assembly-stats step) exit 1. Signals follow the shell's
128 + signal number convention.
"""

import signal

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_USAGE = 2  # click reports bad options with this code
EXIT_SIGINT = 128 + int(signal.SIGINT)
EXIT_SIGTERM = 128 + int(signal.SIGTERM)
