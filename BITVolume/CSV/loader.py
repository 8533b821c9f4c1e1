import re
from collections import namedtuple

import numpy as np
import pandas as pd
from tqdm import tqdm

from ..utils import merge_settings

# timestamp, open, high, low, close, volume
N_FIELDS = 6
CLOSE_FIELD = 4
VOLUME_FIELD = 5

INT64_MIN = int(np.iinfo(np.int64).min)
INT64_MAX = int(np.iinfo(np.int64).max)


INT_LITERAL = re.compile(r'[+-]?[0-9]+')
# lone surrogates left by undecodable bytes
UNDECODABLE = '[\udc80-\udcff]'


class IngestError(Exception):
    """Raised when the batch source cannot be read at all."""


CsvRow = namedtuple("CsvRow", "ts, close, volume, bucket")


class IngestReport(namedtuple("IngestReport", "rows, applied, out_of_bounds, bad, total_volume")):
    __slots__ = ()

    def summary(self, path):
        return (f"Loaded '{path}': rows={self.rows}, applied={self.applied}, "
                f"out_of_bounds={self.out_of_bounds}, bad={self.bad}, total_volume={self.total_volume}")


def _stripped(column):
    column = column.astype(object)
    return column.where(column.isna(), column.astype(str).str.strip())


def _exact_volume(text, number):
    # integer literals convert exactly, other numbers truncate toward zero like stoll
    value = int(text) if INT_LITERAL.fullmatch(text) else int(number)
    return value if INT64_MIN <= value <= INT64_MAX else None


def parse_csv_lines(lines, delimiter=','):
    """
    Parses data lines (header already removed).

    A line is malformed when it has fewer than six fields, when close or volume
    is not a finite number, when volume does not fit in 64 bits, or when it
    holds bytes that could not be decoded. Fields past the sixth are ignored.

    Parameters
    ----------
    lines : list of str
        Raw lines, one record each.
    delimiter : str
        Field separator.

    Returns
    -------
    parsed : pandas.DataFrame
        One row per line with columns ts, close, volume, bucket and valid.
        bucket is close truncated toward zero, volume holds ints (None when
        malformed).
    """
    if delimiter == '':
        raise ValueError("delimiter must not be empty")
    lines = pd.Series(lines, dtype=object).str.rstrip('\r')
    fields = lines.str.split(delimiter, n=N_FIELDS, expand=True, regex=False)
    fields = fields.reindex(columns=range(N_FIELDS + 1))

    close = pd.to_numeric(_stripped(fields[CLOSE_FIELD]), errors='coerce').astype(float)
    volume_text = _stripped(fields[VOLUME_FIELD])
    volume_number = pd.to_numeric(volume_text, errors='coerce').astype(float)

    numeric = np.isfinite(close) & np.isfinite(volume_number)
    numeric &= ~lines.str.contains(UNDECODABLE, regex=True).astype(bool)
    volume = pd.Series([_exact_volume(t, x) if ok else None
                        for t, x, ok in zip(volume_text, volume_number, numeric)],
                       index=lines.index, dtype=object)

    return pd.DataFrame({
        'ts': fields[0],
        'close': close,
        'volume': volume,
        # truncation toward zero, not rounding: 12.7 -> 12, -0.5 -> 0
        'bucket': np.trunc(close),
        'valid': numeric & volume.notna(),
    })


def parse_csv_row(line, delimiter=','):
    """
    Parses one data line into a CsvRow, or returns None if it is malformed.
    See parse_csv_lines.
    """
    row = parse_csv_lines([line.rstrip('\n')], delimiter=delimiter).iloc[0]
    if not row['valid']:
        return None
    return CsvRow(row['ts'], float(row['close']), int(row['volume']), int(row['bucket']))


def _read_lines(path):
    try:
        with open(path, 'r', encoding='utf-8', errors='surrogateescape') as f:
            text = f.read()
    except OSError as e:
        raise IngestError(f"Unable to open {path}") from e
    lines = text.split('\n')
    if lines[-1] == '':
        lines.pop()
    return lines


def load_csv_batch(path, fenwick, settings=None):
    """
    Buckets the volumes of a price CSV into a Fenwick tree.

    The first line of the file is a header. Every later line is a row:
    rows that do not parse are counted as bad, rows whose bucket falls outside
    [1, fenwick.size()] are counted as out of bounds, and the rest are applied
    with fenwick.add(bucket, volume).

    Parameters
    ----------
    path : str
        CSV file to read.
    fenwick : FenwickTree
        Tree receiving the volumes.
    settings : dict, optional
        Uses 'delimiter', 'show_progress' and 'verbose'.

    Returns
    -------
    IngestReport
        Counts of rows seen, applied, out of bounds and bad, and the total
        applied volume.

    Raises
    ------
    IngestError
        If the file cannot be opened. The tree is left untouched. Bytes that
        do not decode only make their own row bad.
    ValueError
        If the delimiter is empty.
    """
    settings = merge_settings(settings)
    lines = _read_lines(path)[1:]
    parsed = parse_csv_lines(lines, delimiter=settings['delimiter'])

    valid = parsed['valid'].to_numpy(dtype=bool)
    if settings['verbose']:
        for i in np.flatnonzero(~valid):
            # +2: 1-based, after the header
            print(f"WARNING: skipping malformed row at line {i + 2} of {path}.")

    rows = parsed.loc[valid]
    n = fenwick.size()
    in_bounds = (rows['bucket'] >= 1) & (rows['bucket'] <= n)
    to_apply = rows.loc[in_bounds, ['bucket', 'volume']]

    total_volume = 0
    for bucket, volume in tqdm(to_apply.itertuples(index=False, name=None), total=len(to_apply),
                               desc='Loading', disable=not settings['show_progress']):
        fenwick.add(int(bucket), int(volume))
        total_volume += int(volume)

    return IngestReport(rows=len(lines),
                        applied=len(to_apply),
                        out_of_bounds=int((~in_bounds).sum()),
                        bad=int((~valid).sum()),
                        total_volume=total_volume)
