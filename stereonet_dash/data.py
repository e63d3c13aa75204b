# data.py
import logging
from io import StringIO

import numpy as np
import pandas as pd

from .errors import DataFormatError
from .features import LINE, PLANE

logger = logging.getLogger(__name__)

# -------------------------
# Column names (matched case-insensitively)
# -------------------------
DIP_COLUMNS = ("dip", "dip_angle", "dipangle", "plunge")
DIP_DIRECTION_COLUMNS = ("dipdir", "dip_direction", "dipdirection", "trend", "azimuth")
KIND_COLUMN = "kind"


def _col_lookup(df):
    return {str(c).strip().lower(): c for c in df.columns}


def find_column(df, candidates):
    lookup = _col_lookup(df)
    for name in candidates:
        if name in lookup:
            return lookup[name]
    return None


def to_numeric_series(df, col):
    return pd.to_numeric(df[col], errors="coerce")


def read_measurements(source):
    """CSV path, buffer or raw text -> DataFrame."""
    if isinstance(source, str) and "\n" in source:
        source = StringIO(source)
    return pd.read_csv(source)


def measurement_columns(df):
    dip_col = find_column(df, DIP_COLUMNS)
    dipdir_col = find_column(df, DIP_DIRECTION_COLUMNS)
    missing = []
    if dip_col is None:
        missing.append("dip")
    if dipdir_col is None:
        missing.append("dip direction")
    if missing:
        raise DataFormatError(f"Missing required columns: {', '.join(missing)}")
    return dip_col, dipdir_col


def load_measurements(stereonet, df, kind=PLANE):
    """
    Add every row of df to the stereonet. Rows that are not numeric or out of
    range are logged and skipped. With kind=None a 'kind' column
    (plane/line) decides per row, defaulting to plane.
    Returns the ids produced, as (kind, id) pairs, in row order.
    """
    dip_col, dipdir_col = measurement_columns(df)
    dips = to_numeric_series(df, dip_col).to_numpy(dtype=float)
    dipdirs = to_numeric_series(df, dipdir_col).to_numpy(dtype=float)
    kind_col = find_column(df, (KIND_COLUMN,)) if kind is None else None

    added = []
    for row, (dip, dipdir) in enumerate(zip(dips, dipdirs)):
        if not (np.isfinite(dip) and np.isfinite(dipdir)):
            logger.warning("Row %d has no numeric dip/dip direction. Skipping.", row)
            continue
        row_kind = kind
        if row_kind is None:
            row_kind = PLANE
            if kind_col is not None and pd.notna(df[kind_col].iloc[row]):
                row_kind = str(df[kind_col].iloc[row]).strip().lower()
        if row_kind == PLANE:
            feature_id = stereonet.add_plane(float(dip), float(dipdir))
        elif row_kind == LINE:
            feature_id = stereonet.add_line(float(dip), float(dipdir))
        else:
            logger.warning("Row %d has unknown kind %r. Skipping.", row, row_kind)
            continue
        if feature_id is not None:
            added.append((row_kind, feature_id))
    logger.info("Loaded %d of %d rows", len(added), len(df))
    return added
