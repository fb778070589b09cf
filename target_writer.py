"""
target_writer: push a payload to each configured target.

The payload comes from a PayloadSource callable so callers decide what gets
written; fixed_payload("data") is the default.
"""

import sys
from typing import BinaryIO, Callable, Dict, Iterable, Optional

import requests

from errors import FileIOError, NetworkError
from models import Endpoint, EndpointType
from run_log import log

DEFAULT_PAYLOAD = "data"

PayloadSource = Callable[[Endpoint], str]


def fixed_payload(text: str = DEFAULT_PAYLOAD) -> PayloadSource:
    """Return a PayloadSource that hands every target the same text."""
    def _payload(target: Endpoint) -> str:
        return text
    return _payload


def _status_line(resp) -> str:
    # e.g. "200 OK"
    return f"{resp.status_code} {resp.reason or ''}".rstrip()


def _write_api(target: Endpoint, payload: str, session, out: BinaryIO, timeout: Optional[float]) -> None:
    try:
        with session.post(target.uri, data=payload.encode("utf-8"), timeout=timeout) as resp:
            status = _status_line(resp)
    except requests.RequestException as e:
        raise NetworkError(f"target {target.name!r}: POST {target.uri} failed: {e}") from e

    # A non-2xx answer is reported, not raised.
    out.write(status.encode("utf-8") + b"\n")


def _write_file(target: Endpoint, payload: str, session, out: BinaryIO, timeout: Optional[float]) -> None:
    try:
        with open(target.uri, "w", encoding="utf-8") as f:
            f.write(payload)
    except OSError as e:
        raise FileIOError(f"target {target.name!r}: cannot write {target.uri}: {e}") from e


def _write_db(target: Endpoint, payload: str, session, out: BinaryIO, timeout: Optional[float]) -> None:
    log(f"DB integration not implemented yet (target {target.name!r})")


_WRITERS: Dict[EndpointType, Callable[..., None]] = {
    EndpointType.API: _write_api,
    EndpointType.FILE: _write_file,
    EndpointType.DB: _write_db,
}


def write_target(
    target: Endpoint,
    payload: Optional[PayloadSource] = None,
    session=None,
    out: Optional[BinaryIO] = None,
    timeout: Optional[float] = None,
) -> None:
    writer = _WRITERS.get(target.type)
    if writer is None:
        return
    payload = payload or fixed_payload()
    writer(target, payload(target), session or requests, out or sys.stdout.buffer, timeout)


def write_targets(
    targets: Iterable[Endpoint],
    payload: Optional[PayloadSource] = None,
    session=None,
    out: Optional[BinaryIO] = None,
    timeout: Optional[float] = None,
) -> None:
    """
    Write the payload to every target in order. The first NetworkError or
    FileIOError propagates and the remaining targets are not touched.

    Nothing here is idempotent: a rerun POSTs again and rewrites the files.
    """
    for target in targets:
        write_target(target, payload=payload, session=session, out=out, timeout=timeout)
