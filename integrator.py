"""
integrator: run one integration pass.

- Load the config.
- Read every data source.
- Write every data target.
- Email a completion notice.

Phases run in that order, once. The first error stops the run; nothing
already written to targets is undone.
"""

import sys
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Optional, Union

import requests

from config_loader import DEFAULT_CONFIG_PATH, load_config
from errors import IntegrationError
from models import IntegratorConfig
from notifier import send_completion_email
from run_log import log
from source_reader import read_sources
from target_writer import PayloadSource, fixed_payload, write_targets


class Phase(Enum):
    LOAD = "load"
    READ_SOURCES = "read-sources"
    WRITE_TARGETS = "write-targets"
    NOTIFY = "notify"
    DONE = "done"
    FAILED = "failed"


class DataPipelineIntegrator:
    def __init__(
        self,
        config: IntegratorConfig,
        payload: Optional[PayloadSource] = None,
        out: Optional[BinaryIO] = None,
    ) -> None:
        self.config = config
        self.payload = payload or fixed_payload()
        self.out = out
        self.phase = Phase.LOAD
        # Phase that was running when the run failed, if it did.
        self.failed_phase: Optional[Phase] = None

    @classmethod
    def from_config_file(
        cls,
        path: Union[str, Path] = DEFAULT_CONFIG_PATH,
        payload: Optional[PayloadSource] = None,
        out: Optional[BinaryIO] = None,
    ) -> "DataPipelineIntegrator":
        config = load_config(path)
        log(
            f"Loaded {path}: {len(config.data_sources)} source(s), "
            f"{len(config.data_targets)} target(s)"
        )
        return cls(config, payload=payload, out=out)

    def _enter(self, phase: Phase) -> None:
        self.phase = phase
        log(f"Phase: {phase.value}")

    def integrate(self) -> None:
        """
        Run sources, targets and the notification in order.

        Raises the first IntegrationError encountered; self.phase is then
        Phase.FAILED and self.failed_phase names where it happened.
        """
        out = self.out or sys.stdout.buffer
        timeout = self.config.http.timeout
        try:
            with requests.Session() as session:
                self._enter(Phase.READ_SOURCES)
                read_sources(self.config.data_sources, session=session, out=out, timeout=timeout)

                self._enter(Phase.WRITE_TARGETS)
                write_targets(
                    self.config.data_targets,
                    payload=self.payload,
                    session=session,
                    out=out,
                    timeout=timeout,
                )

            self._enter(Phase.NOTIFY)
            send_completion_email(self.config.email)
        except IntegrationError:
            self.failed_phase = self.phase
            self.phase = Phase.FAILED
            raise

        self._enter(Phase.DONE)
