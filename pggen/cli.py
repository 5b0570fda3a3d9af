"""Command line argument handling for the code generator."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import NoReturn

from pggen.config import Config

USAGE = """
Usage: pggen [<options>] <config-file>

Args:
  <config-file>    TOML file listing the database objects to generate code for.

Options:
  -h, --help
        Show this help text and exit.

  -d, --disable-var <var-pattern>
        Do nothing when the pattern matches the environment. 'NAME' matches
        when a variable called NAME is set; 'NAME=value' matches when it holds
        that value. Repeatable; any single match disables generation.

  -e, --enable-var <var-pattern>
        Only generate when the pattern matches the environment. Repeatable.
        Combined with disable vars, generation is skipped whenever any
        pattern calls for it.

  -c, --connection-string <connection-string>
        Postgres connection string used to read the schema. Repeatable; the
        strings are tried in the given order until one connects. A value
        starting with '$' names an environment variable. Falls back to $DB_URL.

  -o, --output-file <file-name>
        File to write generated code into. A '.go' suffix becomes '.gen.go'.
        Falls back to "./pg_generated.gen.go".
"""

_LIST_OPTIONS = {
    "-c": "connection_strings",
    "--connection-string": "connection_strings",
    "-d": "disable_vars",
    "--disable-var": "disable_vars",
    "-e": "enable_vars",
    "--enable-var": "enable_vars",
}

_OUTPUT_OPTIONS = frozenset({"-o", "--output-file"})
_HELP_OPTIONS = frozenset({"-h", "--help"})


def usage(ok: bool) -> NoReturn:
    """Print the usage text and exit: to stdout with 0 if ``ok``, else stderr with 1."""
    stream = sys.stdout if ok else sys.stderr
    stream.write(USAGE)
    raise SystemExit(0 if ok else 1)


def parse_args(argv: Sequence[str] | None = None) -> Config:
    """Parse command line arguments (without the program name) into a Config.

    Malformed arguments print the usage text and exit with status 1.
    """
    remaining = list(sys.argv[1:] if argv is None else argv)
    if not remaining:
        usage(False)

    config = Config()
    while remaining:
        flag = remaining[0]
        takes_value = flag in _LIST_OPTIONS or flag in _OUTPUT_OPTIONS
        if takes_value:
            if len(remaining) < 2:
                usage(False)
            value = remaining[1]
            if flag in _OUTPUT_OPTIONS:
                config.output_file_name = value
            else:
                getattr(config, _LIST_OPTIONS[flag]).append(value)
            del remaining[:2]
        elif flag in _HELP_OPTIONS:
            usage(True)
        elif len(remaining) == 1:
            config.config_file_path = flag
            break
        else:
            usage(False)
    return config