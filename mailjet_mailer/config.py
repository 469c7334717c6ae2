"""Connection options for the Mailjet API and their environment loading.

Options are normally passed to :class:`~mailjet_mailer.mailer.mailjet_sender.MailjetSender`
as a plain mapping.  :func:`load_from_env` is the only place that reads
``os.environ``; it recognises the following variables:

* ``MAILJET_API_KEY``/``MJ_APIKEY_PUBLIC`` – API key (Basic Auth username)
* ``MAILJET_API_SECRET``/``MJ_APIKEY_PRIVATE`` – API secret (Basic Auth password)
* ``MAILJET_API_SECURE`` – "1"/"true"/"yes" selects HTTPS; defaults to true
* ``MAILJET_API_HOSTNAME`` – API host; defaults to ``api.mailjet.com``
* ``MAILJET_API_PORT`` – API port; defaults to 443 for HTTPS and 80 for HTTP
* ``MAILJET_API_TIMEOUT`` – optional request timeout in seconds

The first defined variable of each alias pair wins.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple, Union

from mailjet_mailer.errors import InvalidArgument

DEFAULT_HOSTNAME = "api.mailjet.com"
HTTPS_PORT = 443
HTTP_PORT = 80

# Accepted option keys mapped to their canonical name.
_OPTION_KEYS = {
    "secure": "secure",
    "hostname": "hostname",
    "port": "port",
    "timeout": "timeout",
    "apiSecure": "secure",
    "apiHostname": "hostname",
    "apiPort": "port",
}

_TRUTHY = {"1", "true", "yes"}
_FALSY = {"0", "false", "no"}


@dataclass(frozen=True)
class ConnectionOptions:
    """Where and how to reach the API.

    ``timeout`` is ``None`` by default, meaning a stalled connection blocks
    the send indefinitely.
    """

    secure: bool = True
    hostname: str = DEFAULT_HOSTNAME
    port: Optional[int] = None
    timeout: Optional[float] = None

    def __post_init__(self) -> None:
        if not isinstance(self.secure, bool):
            raise InvalidArgument("secure must be a bool")
        if not isinstance(self.hostname, str) or not self.hostname:
            raise InvalidArgument("hostname must be a non-empty string")
        if self.port is None:
            object.__setattr__(self, "port", HTTPS_PORT if self.secure else HTTP_PORT)
        elif isinstance(self.port, bool) or not isinstance(self.port, int) or not 0 < self.port < 65536:
            raise InvalidArgument(f"port must be an integer between 1 and 65535, got {self.port!r}")
        if self.timeout is not None:
            if isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float)) or self.timeout <= 0:
                raise InvalidArgument(f"timeout must be a positive number, got {self.timeout!r}")

    @property
    def scheme(self) -> str:
        return "https" if self.secure else "http"

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.hostname}:{self.port}"


def resolve_options(
    options: Union[None, ConnectionOptions, Mapping[str, Any]],
) -> ConnectionOptions:
    """Normalise ``options`` into a :class:`ConnectionOptions`.

    ``None`` values inside a mapping count as unset so that callers can
    forward optional settings without filtering them first.
    """
    if options is None:
        return ConnectionOptions()
    if isinstance(options, ConnectionOptions):
        return options
    if not isinstance(options, Mapping):
        raise InvalidArgument(f"options must be a mapping, got {type(options).__name__}")

    kwargs: dict[str, Any] = {}
    for key, value in options.items():
        name = _OPTION_KEYS.get(key)
        if name is None:
            raise InvalidArgument(f"Unknown connection option: {key!r}")
        if value is not None:
            kwargs[name] = value
    return ConnectionOptions(**kwargs)


def _env(*names: str) -> Optional[str]:
    for name in names:
        value = os.environ.get(name)
        if value:
            return value
    return None


def _parse_bool(name: str, raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise InvalidArgument(f"{name} must be one of {sorted(_TRUTHY | _FALSY)}, got {raw!r}")


def load_from_env() -> Tuple[str, str, ConnectionOptions]:
    """Read credentials and connection options from the environment."""
    api_key = _env("MAILJET_API_KEY", "MJ_APIKEY_PUBLIC")
    api_secret = _env("MAILJET_API_SECRET", "MJ_APIKEY_PRIVATE")
    if not api_key or not api_secret:
        raise InvalidArgument("MAILJET_API_KEY and MAILJET_API_SECRET must be set")

    secure_raw = _env("MAILJET_API_SECURE")
    port_raw = _env("MAILJET_API_PORT")
    timeout_raw = _env("MAILJET_API_TIMEOUT")

    try:
        port = int(port_raw) if port_raw else None
    except ValueError:
        raise InvalidArgument(f"MAILJET_API_PORT must be an integer, got {port_raw!r}") from None
    try:
        timeout = float(timeout_raw) if timeout_raw else None
    except ValueError:
        raise InvalidArgument(f"MAILJET_API_TIMEOUT must be a number, got {timeout_raw!r}") from None

    options = ConnectionOptions(
        secure=_parse_bool("MAILJET_API_SECURE", secure_raw) if secure_raw else True,
        hostname=_env("MAILJET_API_HOSTNAME") or DEFAULT_HOSTNAME,
        port=port,
        timeout=timeout,
    )
    return api_key, api_secret, options


__all__ = ["ConnectionOptions", "DEFAULT_HOSTNAME", "load_from_env", "resolve_options"]
