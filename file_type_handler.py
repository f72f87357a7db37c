import logging
import os
import time
from functools import partial
from typing import BinaryIO, Callable

import fastavro
import pandas as pd
import pyarrow.parquet as pq

from table import Table

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = ("csv", "tsv", "avro", "parquet")
CSV_SCHEMA_SAMPLE_ROWS = 3


class IngestError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnsupportedFormat(IngestError):
    def __init__(self, extension: str | None):
        self.extension = extension
        if extension is None:
            message = "file extension should be specified"
        else:
            message = f"unsupported file extension: {extension}"
        super().__init__(message)


class DecodeError(IngestError):
    def __init__(self, message: str, fmt: str | None = None):
        super().__init__(message)
        self.format = fmt


def detect_format(path: str) -> str:
    _, ext = os.path.splitext(path)
    if not ext or ext == ".":
        raise UnsupportedFormat(None)
    ext = ext[1:].lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFormat(ext)
    return ext


# ---------- decoders ----------


def _csv_dtype(series: pd.Series):
    """Map a sampled column to the dtype enforced on the full read."""
    api = pd.api.types
    if series.isna().all():
        return None
    if api.is_bool_dtype(series.dtype):
        return "boolean"
    if api.is_integer_dtype(series.dtype):
        return "Int64"
    if api.is_float_dtype(series.dtype):
        return "float64"
    return str


def _looks_temporal(series: pd.Series) -> bool:
    values = series.dropna()
    if values.empty:
        return False
    try:
        pd.to_datetime(values, format="ISO8601")
    except (ValueError, TypeError, OverflowError):
        return False
    return True


def read_delimited(handle: BinaryIO, separator: str = ",") -> pd.DataFrame:
    sample = pd.read_csv(
        handle, sep=separator, header=0, nrows=CSV_SCHEMA_SAMPLE_ROWS
    )
    dtypes = {}
    date_cols = []
    for name in sample.columns:
        dtype = _csv_dtype(sample[name])
        if dtype is None:
            continue
        dtypes[name] = dtype
        if dtype is str and _looks_temporal(sample[name]):
            date_cols.append(name)

    handle.seek(0)
    df = pd.read_csv(handle, sep=separator, header=0, dtype=dtypes)

    for name in date_cols:
        try:
            df[name] = pd.to_datetime(df[name], format="ISO8601")
        except (ValueError, TypeError, OverflowError):
            logger.debug("column %r kept as text; not all values parse as dates", name)
    return df


def _avro_dtype(field_type):
    if isinstance(field_type, list):
        branches = [t for t in field_type if t != "null"]
        if len(branches) != 1:
            return None
        field_type = branches[0]
    if isinstance(field_type, dict):
        logical = field_type.get("logicalType")
        if logical is not None:
            # fastavro already decodes these into python objects
            if logical == "date" or logical.startswith(("timestamp", "local-timestamp")):
                return "datetime"
            return None
        field_type = field_type.get("type")
        if not isinstance(field_type, str):
            return None
    return {
        "int": "Int64",
        "long": "Int64",
        "float": "float64",
        "double": "float64",
        "boolean": "boolean",
    }.get(field_type)


def read_avro(handle: BinaryIO) -> pd.DataFrame:
    reader = fastavro.reader(handle)
    fields = reader.writer_schema.get("fields", [])
    names = [f["name"] for f in fields]
    df = pd.DataFrame.from_records(list(reader), columns=names)
    for f in fields:
        dtype = _avro_dtype(f["type"])
        if dtype == "datetime":
            df[f["name"]] = pd.to_datetime(df[f["name"]])
        elif dtype is not None:
            df[f["name"]] = df[f["name"]].astype(dtype)
    return df


def read_parquet(handle: BinaryIO) -> pd.DataFrame:
    table = pq.read_table(handle, use_threads=True, pre_buffer=True)
    return table.combine_chunks().to_pandas()


DECODERS: dict[str, Callable[[BinaryIO], pd.DataFrame]] = {
    "csv": partial(read_delimited, separator=","),
    "tsv": partial(read_delimited, separator="\t"),
    "avro": read_avro,
    "parquet": read_parquet,
}


# ---------- dispatcher ----------


class FileTypeHandler:
    def __init__(self, path: str, decoders=None):
        self.path = path
        self.format = detect_format(path)
        self.decoders = DECODERS if decoders is None else decoders

    def load(self) -> Table:
        decoder = self.decoders[self.format]
        started = time.perf_counter()
        try:
            with open(self.path, "rb") as handle:
                df = decoder(handle)
        except Exception as exc:
            message = str(exc) or type(exc).__name__
            logger.warning("decoding %s as %s failed: %s", self.path, self.format, message)
            raise DecodeError(message, self.format) from exc

        table = Table.from_frame(df)
        logger.info(
            "loaded %s as %s: %d rows x %d cols in %.3fs",
            self.path,
            self.format,
            table.row_count,
            table.column_count,
            time.perf_counter() - started,
        )
        return table


def read_table(path: str) -> Table:
    return FileTypeHandler(path).load()
