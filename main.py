#!/usr/bin/env python3
"""
Entry point for the data pipeline integrator.

    python main.py [config.json]

Exit status is 0 when every phase finished, 1 on the first error.
"""

import argparse
from typing import List, Optional

# *** IMPORTANT ***
# These must be absolute imports because main.py is run directly as a script.
from config_loader import DEFAULT_CONFIG_PATH
from errors import ConfigError, IntegrationError
from integrator import DataPipelineIntegrator, Phase
from run_log import log


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Pull data from configured sources, push to targets, email when done."
    )
    parser.add_argument(
        "config",
        nargs="?",
        default=DEFAULT_CONFIG_PATH,
        help=f"path to the JSON configuration (default: {DEFAULT_CONFIG_PATH})",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)

    try:
        integrator = DataPipelineIntegrator.from_config_file(args.config)
    except ConfigError as e:
        log(f"Integration failed during {Phase.LOAD.value}: {e}")
        return 1

    try:
        integrator.integrate()
    except IntegrationError as e:
        phase = integrator.failed_phase or integrator.phase
        log(f"Integration failed during {phase.value}: {e}")
        return 1

    log("Integration complete")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
