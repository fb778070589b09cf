"""
source_reader: pull data from each configured source and echo it to stdout.

- api:  GET the URI, print the whole body.
- file: print a header, then copy the file.
- db:   not implemented; logged and skipped.
Anything else is skipped without a word.

Data is copied as raw bytes to a binary stream (sys.stdout.buffer by
default); nothing is decoded on the way through.
"""

import shutil
import sys
from typing import BinaryIO, Callable, Dict, Iterable, Optional

import requests

from errors import FileIOError, NetworkError
from models import Endpoint, EndpointType
from run_log import log

DB_NOT_IMPLEMENTED = "DB integration not implemented yet"
FILE_HEADER = b"File content:\n"


def _read_api(source: Endpoint, session, out: BinaryIO, timeout: Optional[float]) -> None:
    try:
        # The response (and its connection) is released before the next source.
        with session.get(source.uri, timeout=timeout) as resp:
            resp.raise_for_status()
            body = resp.content
    except requests.RequestException as e:
        raise NetworkError(f"source {source.name!r}: GET {source.uri} failed: {e}") from e

    out.write(body)
    out.write(b"\n")


def _read_file(source: Endpoint, session, out: BinaryIO, timeout: Optional[float]) -> None:
    try:
        f = open(source.uri, "rb")
    except OSError as e:
        raise FileIOError(f"source {source.name!r}: cannot open {source.uri}: {e}") from e

    with f:
        out.write(FILE_HEADER)
        try:
            shutil.copyfileobj(f, out)
        except OSError as e:
            raise FileIOError(
                f"source {source.name!r}: error copying {source.uri} to output: {e}"
            ) from e


def _read_db(source: Endpoint, session, out: BinaryIO, timeout: Optional[float]) -> None:
    log(f"{DB_NOT_IMPLEMENTED} (source {source.name!r})")


_READERS: Dict[EndpointType, Callable[..., None]] = {
    EndpointType.API: _read_api,
    EndpointType.FILE: _read_file,
    EndpointType.DB: _read_db,
}


def read_source(
    source: Endpoint,
    session=None,
    out: Optional[BinaryIO] = None,
    timeout: Optional[float] = None,
) -> None:
    reader = _READERS.get(source.type)
    if reader is None:
        return
    reader(source, session or requests, out or sys.stdout.buffer, timeout)


def read_sources(
    sources: Iterable[Endpoint],
    session=None,
    out: Optional[BinaryIO] = None,
    timeout: Optional[float] = None,
) -> None:
    """
    Read every source in order. The first NetworkError or FileIOError
    propagates and the remaining sources are not touched.
    """
    for source in sources:
        read_source(source, session=session, out=out, timeout=timeout)
