"""SQL statement builders and value helpers used at run time by generated clients."""

from __future__ import annotations

import datetime as _dt
import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from pggen.field_set import FieldSet


@dataclass(frozen=True)
class FieldNameAndIdx:
    """A column name together with its field index in the generated record."""

    name: str
    idx: int


class PgError(Exception):
    """An error reported by the postgres server."""

    def __init__(self, code: str, severity: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.severity = severity
        self.message = message


def _skipped(
    field: FieldNameAndIdx,
    pkey_name: str,
    include_id: bool,
    default_field_set: FieldSet | None,
) -> bool:
    if not include_id and field.name == pkey_name:
        return True
    return default_field_set is not None and default_field_set.test(field.idx)


def gen_insert_common(
    table: str,
    fields: Sequence[FieldNameAndIdx],
    nrecords: int,
    pkey_name: str,
    include_id: bool,
    default_field_set: FieldSet | None,
) -> str:
    """Build an ``INSERT INTO ... VALUES`` statement for ``nrecords`` records."""
    parts = ["INSERT INTO ", table, " ("]
    for i, field in enumerate(fields):
        if _skipped(field, pkey_name, include_id, default_field_set):
            continue
        parts.append(f'"{field.name}"')
        if i + 1 < len(fields):
            parts.append(",")
    parts.append(") VALUES ")

    n_insert_fields = sum(
        not _skipped(f, pkey_name, include_id, default_field_set) for f in fields
    )

    next_arg = 1
    for rec_no in range(nrecords):
        slots = [f"${arg}" for arg in range(next_arg, next_arg + n_insert_fields)]
        next_arg += n_insert_fields
        parts.append("(")
        parts.append(", ".join(slots))
        parts.append("),\n" if rec_no < nrecords - 1 else ")\n")
    return "".join(parts)


def gen_bulk_insert_stmt(
    table: str,
    fields: Sequence[FieldNameAndIdx],
    nrecords: int,
    pkey_name: str,
    include_id: bool,
    default_field_set: FieldSet | None,
) -> str:
    """Build an insert statement that returns the primary key of each record."""
    stmt = gen_insert_common(
        table, fields, nrecords, pkey_name, include_id, default_field_set
    )
    return f'{stmt} RETURNING "{pkey_name}"'


def gen_update_stmt(
    table: str,
    pg_pkey: str,
    fields: Sequence[FieldNameAndIdx],
    field_mask: FieldSet,
    pkey_name: str,
) -> str:
    """Build an ``UPDATE`` statement for the fields selected by ``field_mask``.

    The mask selects fields by their position in ``fields``.
    """
    lhs = [f.name for i, f in enumerate(fields) if field_mask.test(i)]
    if not lhs:
        raise ValueError("update field mask selects no fields")
    rhs = [f"${n}" for n in range(1, len(lhs) + 1)]

    if len(lhs) > 1:
        target = "(" + ",".join(f'"{name}"' for name in lhs) + ")"
        values = "(" + ", ".join(rhs) + ")"
    else:
        target = f'"{lhs[0]}"'
        values = rhs[0]

    return (
        f"UPDATE {table} SET {target} = {values}"
        f' WHERE "{pg_pkey}" = ${len(lhs) + 1}'
        f' RETURNING "{pkey_name}"'
    )


def column_position_table(
    gen_time_col_idx_tab: Mapping[str, int], columns: Iterable[str]
) -> list[int]:
    """Map each run-time column to its generation-time index, or -1 if new."""
    return [gen_time_col_idx_tab.get(col, -1) for col in columns]


def is_invalid_cached_plan_error(err: BaseException) -> bool:
    """Return True if ``err`` reports that a cached plan changed its result type."""
    return (
        isinstance(err, PgError)
        and err.code == "0A000"
        and err.severity == "ERROR"
        and err.message == "cached plan must not change result type"
    )


_PG_TIME_RE = re.compile(
    r"(\d{2}):(\d{2}):(\d{2})(?:\.(\d{1,9}))?(?:([+-])(\d{2}))?"
)


def parse_pg_time(value: object) -> _dt.time | _dt.datetime | None:
    """Convert a scanned postgres time value.

    ``None`` stays ``None``, datetime values pass through, and strings of the
    form ``HH:MM:SS`` with an optional fraction and ``±HH`` zone are parsed.
    """
    if value is None:
        return None
    if isinstance(value, (_dt.datetime, _dt.time)):
        return value
    if not isinstance(value, str):
        raise TypeError("scanning to NullTime: expected time.Time")

    match = _PG_TIME_RE.fullmatch(value)
    if match is None:
        raise ValueError(f"parsing pg time: cannot parse {value!r}")
    hour, minute, second, frac, sign, zone_hours = match.groups()
    micros = int((frac or "0").ljust(6, "0")[:6])
    tzinfo = None
    if sign is not None:
        offset = _dt.timedelta(hours=int(zone_hours))
        tzinfo = _dt.timezone(-offset if sign == "-" else offset)
    try:
        return _dt.time(int(hour), int(minute), int(second), micros, tzinfo=tzinfo)
    except ValueError as exc:
        raise ValueError(f"parsing pg time: {exc}") from exc