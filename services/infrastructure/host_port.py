"""
Host/port splitting for key=value style (PostgreSQL) connection strings.
"""
from typing import NamedTuple

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = "5432"


class HostPort(NamedTuple):
    host: str
    port: str


def parse_host_port(raw: str) -> HostPort:
    """
    Split a "host[:port]" string on its last colon.

    IPv6 brackets are not understood: "::1" splits into host ":" and port "1".
    Missing parts fall back to 127.0.0.1 and 5432; this never raises.
    """
    host, port = "", ""
    if ":" in raw:
        host, _, port = raw.rpartition(":")
    elif raw:
        host = raw

    return HostPort(host or DEFAULT_HOST, port or DEFAULT_PORT)
