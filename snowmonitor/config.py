import os
from dataclasses import asdict, dataclass
from typing import Any, Mapping

ENV_PREFIX = "SNOWFLAKE_"
STATEMENT_TIMEOUT_ENV = "SNOWMONITOR_STATEMENT_TIMEOUT"

_CONNECT_FIELDS = ("account", "user", "password", "role", "warehouse", "authenticator", "host")


@dataclass(kw_only=True)
class ClientConfig:
    account: str | None = None
    user: str | None = None
    password: str | None = None
    role: str | None = None
    warehouse: str | None = None
    authenticator: str | None = None
    host: str | None = None
    # Seconds; passed through to cursor.execute(timeout=...).
    statement_timeout: int | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ClientConfig":
        """
        Build a configuration from SNOWFLAKE_* environment variables.

        SNOWMONITOR_STATEMENT_TIMEOUT, when set, must be a whole number of seconds.
        """
        environ = os.environ if environ is None else environ
        values: dict[str, Any] = {
            name: environ.get(f"{ENV_PREFIX}{name.upper()}") or None for name in _CONNECT_FIELDS
        }

        timeout = environ.get(STATEMENT_TIMEOUT_ENV)
        if timeout:
            try:
                values["statement_timeout"] = int(timeout)
            except ValueError:
                raise ValueError(f"{STATEMENT_TIMEOUT_ENV} must be an integer, got {timeout!r}") from None

        return cls(**values)

    def connect_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for snowflake.connector.connect, without unset values."""
        return {
            key: value
            for key, value in asdict(self).items()
            if key in _CONNECT_FIELDS and value is not None
        }
