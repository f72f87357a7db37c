from dataclasses import dataclass, field
from typing import Callable

import numpy as np
import pandas as pd

from column_types import ColumnType, column_type_for

NULL_TEXT = "null"


def _format_default(value) -> str:
    return str(value)


def _format_numeric(value) -> str:
    # numpy 2 reprs scalars as np.float64(...), so go through float
    if isinstance(value, (float, np.floating)):
        return repr(float(value))
    return str(value)


def _format_boolean(value) -> str:
    return "true" if bool(value) else "false"


_FORMATTERS: dict[ColumnType, Callable[[object], str]] = {
    ColumnType.NUMERIC: _format_numeric,
    ColumnType.BOOLEAN: _format_boolean,
}


def _is_null(value) -> bool:
    # nested values (lists, dicts) make pd.isna return arrays
    if value is None:
        return True
    if not pd.api.types.is_scalar(value):
        return False
    return bool(pd.isna(value))


@dataclass(frozen=True)
class Column:
    name: str
    column_type: ColumnType
    dtype_label: str
    values: pd.Series = field(repr=False, compare=False)

    def __len__(self) -> int:
        return len(self.values)

    def display(self, row: int) -> str:
        value = self.values.iat[row]
        if _is_null(value):
            return NULL_TEXT
        return _FORMATTERS.get(self.column_type, _format_default)(value)

    @classmethod
    def from_series(cls, name, series: pd.Series) -> "Column":
        return cls(
            name=str(name),
            column_type=column_type_for(series),
            dtype_label=str(series.dtype),
            values=series.reset_index(drop=True),
        )


@dataclass(frozen=True)
class Table:
    columns: tuple[Column, ...]

    def __post_init__(self):
        lengths = {len(c) for c in self.columns}
        if len(lengths) > 1:
            raise ValueError(f"columns have differing lengths: {sorted(lengths)}")

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> "Table":
        return cls(
            tuple(Column.from_series(name, df.iloc[:, i]) for i, name in enumerate(df.columns))
        )

    @property
    def row_count(self) -> int:
        return len(self.columns[0]) if self.columns else 0

    @property
    def column_count(self) -> int:
        return len(self.columns)

    @property
    def column_names(self) -> list[str]:
        return [c.name for c in self.columns]

    def column(self, idx: int) -> Column:
        return self.columns[idx]

    @property
    def shape(self) -> tuple[int, int]:
        return self.row_count, self.column_count
