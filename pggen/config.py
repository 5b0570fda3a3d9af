"""Code generator configuration and its normalisation rules."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

DEFAULT_OUTPUT_FILE_NAME = "./pg_generated.go"


@dataclass
class Config:
    """Options for one run of the code generator.

    ``verbosity`` is -1 for quiet, 0 for normal and 1 for verbose output.
    Connection strings are tried in order until one works.
    """

    config_file_path: str = ""
    output_file_name: str = ""
    connection_strings: list[str] = field(default_factory=list)
    disable_vars: list[str] = field(default_factory=list)
    enable_vars: list[str] = field(default_factory=list)
    verbosity: int = 0


def normalize_output_file_name(name: str) -> str:
    """Apply the default output name and rewrite ``.go`` to ``.gen.go``."""
    if not name:
        name = DEFAULT_OUTPUT_FILE_NAME
    if name.endswith(".go") and not name.endswith(".gen.go"):
        name = name[: -len(".go")] + ".gen.go"
    return name


def resolve_connection_strings(
    connection_strings: Sequence[str], environ: Mapping[str, str]
) -> list[str]:
    """Return the connection strings to try, in order.

    Falls back on ``DB_URL`` when none are given. Empty entries are skipped
    and entries of the form ``$VAR`` are replaced by that variable's value.
    """
    if not connection_strings:
        db_url = environ.get("DB_URL", "")
        if not db_url:
            raise ValueError(
                "No connection string. Either pass '-c' or set DB_URL in the environment."
            )
        connection_strings = [db_url]

    resolved = []
    for conn_str in connection_strings:
        if not conn_str:
            continue
        if conn_str.startswith("$"):
            conn_str = environ.get(conn_str[1:], "")
            if not conn_str:
                continue
        resolved.append(conn_str)

    if not resolved:
        raise ConnectionError(
            "unable to connect with any of the provided connection strings"
        )
    return resolved