import json

import pandas as pd


def coerce_cell_value(value) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        pass
    return str(value)


def build_frame(values, headers) -> pd.DataFrame:
    """Build a string frame from row value lists; duplicate headers are kept as-is."""
    columns = pd.Index(list(headers), dtype=object)
    if not values:
        return pd.DataFrame(columns=columns, dtype=object)
    return pd.DataFrame(list(values), columns=columns, dtype=object)


def rows_to_frame(rows, headers) -> pd.DataFrame:
    values = []
    for row in rows:
        values.append([coerce_cell_value(row.get(h)) for h in headers])
    return build_frame(values, headers)


def frame_values(df: pd.DataFrame) -> list[list[str]]:
    if len(df.columns) == 0:
        return [[] for _ in range(len(df))]
    return [list(values) for values in df.itertuples(index=False, name=None)]


def frame_to_rows(df: pd.DataFrame) -> list[dict[str, str]]:
    headers = list(df.columns)
    return [dict(zip(headers, values)) for values in frame_values(df)]
