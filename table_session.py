import logging

import pandas as pd

from cell_coercion import build_frame, frame_to_rows, rows_to_frame
from errors import StateInvariantViolation

logger = logging.getLogger(__name__)


class TableSession:
    def __init__(self):
        self.selected_table: str | None = None

        self._df = build_frame([], [])
        self.headers: list[str] = []
        self.editable_headers: list[str] = []
        self.header_errors: list[str] = []
        self.columns_to_delete: list[str] = []
        self.is_dirty = False

        # generation counts applied loads, revision counts applied edits
        self.generation = 0
        self.revision = 0

    @property
    def df(self) -> pd.DataFrame:
        return self._df

    @property
    def rows(self) -> list[dict[str, str]]:
        return frame_to_rows(self._df)

    def replace_loaded(self, table_name: str, rows) -> None:
        rows = list(rows or [])
        headers = list(rows[0].keys()) if rows else []
        expected = set(headers)
        for pos, row in enumerate(rows):
            if set(row.keys()) != expected:
                logger.debug(
                    "row %d of %s has keys %s; projecting onto %s",
                    pos,
                    table_name,
                    sorted(row.keys()),
                    headers,
                )

        self.selected_table = table_name
        self._df = rows_to_frame(rows, headers)
        self.headers = headers
        self.editable_headers = list(headers)
        self.header_errors = [""] * len(headers)
        self.columns_to_delete = []
        self.is_dirty = False
        self.generation += 1
        self.revision += 1
        self.check_invariants()

    def apply(
        self,
        df=None,
        headers=None,
        editable_headers=None,
        header_errors=None,
        columns_to_delete=None,
    ):
        """Install a new snapshot of the editable parts and mark the session dirty."""
        if df is not None:
            self._df = df
        if headers is not None:
            self.headers = headers
        if editable_headers is not None:
            self.editable_headers = editable_headers
        if header_errors is not None:
            self.header_errors = header_errors
        if columns_to_delete is not None:
            self.columns_to_delete = columns_to_delete
        self.is_dirty = True
        self.revision += 1
        self.check_invariants()

    def mark_saved(self, sent_columns=None, revision=None) -> None:
        if sent_columns is None:
            self.columns_to_delete = []
        else:
            sent = set(sent_columns)
            self.columns_to_delete = [c for c in self.columns_to_delete if c not in sent]
        # edits made while the save was in flight keep the session dirty
        if revision is None or revision == self.revision:
            self.is_dirty = False

    def snapshot(self) -> dict:
        return {
            "df": self._df.copy(deep=True),
            "headers": list(self.headers),
            "editable_headers": list(self.editable_headers),
            "header_errors": list(self.header_errors),
            "columns_to_delete": list(self.columns_to_delete),
        }

    def check_invariants(self) -> None:
        n = len(self.headers)
        if len(self.editable_headers) != n or len(self.header_errors) != n:
            raise StateInvariantViolation(
                f"header arrays out of step: headers={n} "
                f"editable={len(self.editable_headers)} errors={len(self.header_errors)}"
            )
        if list(self._df.columns) != self.headers:
            raise StateInvariantViolation(
                f"row keys {list(self._df.columns)} do not match headers {self.headers}"
            )
