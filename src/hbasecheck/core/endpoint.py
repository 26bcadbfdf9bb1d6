"""Thrift endpoint validation helpers.

The host and port given on the command line are normalised here before any
connection is attempted, so bad input fails fast with a readable message.
"""

from __future__ import annotations

import ipaddress
import re

DEFAULT_PORT = 9090

_HOSTNAME_LABEL_RE = re.compile(r"^(?!-)[A-Za-z0-9-]{1,63}(?<!-)$")


def validate_host(host: str | None) -> str:
    """
    Validate a hostname or IP address.

    - Surrounding whitespace is stripped.
    - IPv4/IPv6 literals are accepted.
    - Hostnames must be at most 253 characters, made of dot-separated labels
      of letters, digits and inner dashes.

    Raises:
        ValueError: If the host is missing or invalid.
    """
    if host is None or not host.strip():
        raise ValueError("host not defined")
    host = host.strip()

    try:
        ipaddress.ip_address(host)
    except ValueError:
        pass
    else:
        return host

    name = host.rstrip(".")
    if len(name) > 253 or not all(
        _HOSTNAME_LABEL_RE.match(label) for label in name.split(".")
    ):
        raise ValueError(f"invalid host '{host}' given")
    return host


def validate_port(port: int | str | None) -> int:
    """Validate a TCP port number (1-65535)."""
    try:
        value = int(port)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ValueError(f"invalid port '{port}' given") from exc
    if not 1 <= value <= 65535:
        raise ValueError(f"invalid port '{port}' given, must be between 1 and 65535")
    return value


def format_endpoint(host: str, port: int) -> str:
    """Return `host:port`, bracketing IPv6 literals."""
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"
