from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

DEFAULT_SENDER = "integrator@example.com"
DEFAULT_SUBJECT = "Integration Complete"
DEFAULT_BODY = "Integration complete!"


class EndpointType(Enum):
    API = "api"
    FILE = "file"
    DB = "db"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, raw: str) -> "EndpointType":
        # "unknown" in a config file is just another unrecognized value.
        for member in (cls.API, cls.FILE, cls.DB):
            if raw == member.value:
                return member
        return cls.UNKNOWN


@dataclass(frozen=True)
class Endpoint:
    name: str = ""
    type: EndpointType = EndpointType.UNKNOWN
    uri: str = ""
    raw_type: str = ""  # as written in the config, for log lines only


@dataclass(frozen=True)
class SmtpSettings:
    server: str = ""
    port: int = 0
    username: str = ""
    password: str = ""
    timeout: Optional[float] = None  # None = socket default


@dataclass(frozen=True)
class EmailNotification:
    smtp: SmtpSettings = field(default_factory=SmtpSettings)
    recipient: str = ""
    sender: str = DEFAULT_SENDER
    subject: str = DEFAULT_SUBJECT
    body: str = DEFAULT_BODY


@dataclass(frozen=True)
class HttpSettings:
    timeout: Optional[float] = None  # None = wait forever, like the stdlib default


@dataclass(frozen=True)
class IntegratorConfig:
    data_sources: Tuple[Endpoint, ...] = ()
    data_targets: Tuple[Endpoint, ...] = ()
    email: EmailNotification = field(default_factory=EmailNotification)
    http: HttpSettings = field(default_factory=HttpSettings)
