from enum import Enum

import pandas as pd


class ColumnType(Enum):
    NUMERIC = "numeric"
    TEXTUAL = "textual"
    TEMPORAL = "temporal"
    BOOLEAN = "boolean"
    OTHER = "other"


class Align(Enum):
    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"


_INFERRED_KINDS = {
    "string": ColumnType.TEXTUAL,
    "empty": ColumnType.TEXTUAL,
    "integer": ColumnType.NUMERIC,
    "floating": ColumnType.NUMERIC,
    "mixed-integer-float": ColumnType.NUMERIC,
    "decimal": ColumnType.NUMERIC,
    "complex": ColumnType.NUMERIC,
    "boolean": ColumnType.BOOLEAN,
    "datetime64": ColumnType.TEMPORAL,
    "datetime": ColumnType.TEMPORAL,
    "date": ColumnType.TEMPORAL,
    "time": ColumnType.TEMPORAL,
    "timedelta64": ColumnType.TEMPORAL,
    "timedelta": ColumnType.TEMPORAL,
    "period": ColumnType.TEMPORAL,
}


def column_type_for(series: pd.Series) -> ColumnType:
    """Classify a decoded column once, from its dtype.

    object columns carry no useful dtype, so their values are inspected a
    single time here; nothing downstream re-infers.
    """
    dtype = series.dtype
    api = pd.api.types
    # bool counts as numeric for pandas, so it goes first
    if api.is_bool_dtype(dtype):
        return ColumnType.BOOLEAN
    if api.is_numeric_dtype(dtype):
        return ColumnType.NUMERIC
    if (
        api.is_datetime64_any_dtype(dtype)
        or api.is_timedelta64_dtype(dtype)
        or isinstance(dtype, pd.PeriodDtype)
    ):
        return ColumnType.TEMPORAL
    if isinstance(dtype, pd.StringDtype):
        return ColumnType.TEXTUAL
    if api.is_object_dtype(dtype):
        kind = api.infer_dtype(series, skipna=True)
        return _INFERRED_KINDS.get(kind, ColumnType.OTHER)
    return ColumnType.OTHER


def alignment_for(column_type: ColumnType) -> Align:
    if column_type is ColumnType.NUMERIC:
        return Align.RIGHT
    return Align.LEFT
