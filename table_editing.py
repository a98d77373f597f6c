import logging

from cell_coercion import build_frame, coerce_cell_value, frame_values
from errors import StateInvariantViolation
from header_validation import rename_error, validate_headers
from session_undo import SessionUndo

logger = logging.getLogger(__name__)


class TableEditingSession:
    """Loads tables and applies row, cell and column edits to the session."""

    def __init__(self, ctx, undo_mgr=None):
        self.ctx = ctx
        self.undo_mgr = undo_mgr if undo_mgr is not None else SessionUndo(ctx)

    @property
    def state(self):
        return self.ctx.state

    # ----- loading -----
    def load(self, table_name: str) -> int | None:
        """Start loading ``table_name``; returns the request id, or None if refused."""
        if self.ctx.save_in_flight:
            logger.info("load of %s refused: save in flight", table_name)
            self.ctx._set_status("Save in progress; try again when it finishes", 3)
            return None
        self.ctx.last_load_id += 1
        request_id = self.ctx.last_load_id
        self.ctx.loading_table = table_name
        logger.info("loading table %s (request %d)", table_name, request_id)
        store = self.ctx.store
        self.ctx.runner.submit(
            lambda: store.fetch_table(table_name),
            lambda rows: self._load_done(request_id, table_name, rows),
            lambda exc: self._load_failed(request_id, table_name, exc),
        )
        return request_id

    def _is_stale(self, request_id: int) -> bool:
        return request_id != self.ctx.last_load_id

    def _load_done(self, request_id, table_name, rows):
        if self._is_stale(request_id):
            logger.info(
                "discarding stale response for %s (request %d, latest %d)",
                table_name,
                request_id,
                self.ctx.last_load_id,
            )
            return
        self.ctx.loading_table = None
        self.state.replace_loaded(table_name, rows)
        self.undo_mgr.clear()
        self.ctx.last_error = None
        count = len(self.state.df)
        logger.info("loaded table %s: %d rows, %d columns", table_name, count, len(self.state.headers))
        self.ctx._set_status(f"Loaded {table_name} ({count} row{'s' if count != 1 else ''})", 2)

    def _load_failed(self, request_id, table_name, exc):
        if self._is_stale(request_id):
            logger.info("ignoring failure of superseded load of %s: %s", table_name, exc)
            return
        self.ctx.loading_table = None
        self.ctx.last_error = exc
        logger.warning("error fetching table %s: %s", table_name, exc)
        self.ctx._set_status(f"Load failed: {exc}", 4)

    # ----- helpers -----
    def _check_position(self, index: int):
        if not 0 <= index < len(self.state.headers):
            raise IndexError(f"column {index} out of range")

    def _column_position(self, header: str) -> int:
        try:
            return self.state.headers.index(header)
        except ValueError:
            raise KeyError(header) from None

    # ----- row and cell operations -----
    def set_cell(self, row_index: int, header: str, value):
        col = self._column_position(header)
        if not 0 <= row_index < len(self.state.df):
            raise IndexError(f"row {row_index} out of range")
        self.undo_mgr.push_undo()
        df = self.state.df.copy()
        df.iat[row_index, col] = coerce_cell_value(value)
        self.state.apply(df=df)

    def replace_rows(self, rows):
        headers = self.state.headers
        expected = set(headers)
        values = []
        for pos, row in enumerate(rows):
            if set(row.keys()) != expected or len(expected) != len(headers):
                raise StateInvariantViolation(
                    f"row {pos} keys {sorted(row.keys())} do not match headers {headers}"
                )
            values.append([coerce_cell_value(row[h]) for h in headers])
        self.undo_mgr.push_undo()
        self.state.apply(df=build_frame(values, headers))

    def add_row(self):
        headers = self.state.headers
        values = frame_values(self.state.df)
        values.append([""] * len(headers))
        self.undo_mgr.push_undo()
        self.state.apply(df=build_frame(values, headers))

    # ----- column operations -----
    def _new_column_name(self) -> str:
        n = len(self.state.headers) + 1
        name = f"column_{n}"
        while name in self.state.headers:
            n += 1
            name = f"column_{n}"
        return name

    def add_column(self) -> str:
        name = self._new_column_name()
        headers = self.state.headers + [name]
        values = [row + [""] for row in frame_values(self.state.df)]
        self.undo_mgr.push_undo()
        self.state.apply(
            df=build_frame(values, headers),
            headers=headers,
            editable_headers=self.state.editable_headers + [""],
            header_errors=self.state.header_errors + [""],
        )
        return name

    def rename_header_input(self, index: int, text: str):
        self._check_position(index)
        old_headers = self.state.headers
        editable = list(self.state.editable_headers)
        editable[index] = text

        headers = list(old_headers)
        df = None
        if text:
            headers[index] = text
            df = self.state.df.set_axis(headers, axis=1)

        errors = list(self.state.header_errors)
        errors[index] = rename_error(index, old_headers, text)

        self.undo_mgr.push_undo()
        self.state.apply(
            df=df,
            headers=headers,
            editable_headers=editable,
            header_errors=errors,
        )

    def delete_column(self, index: int) -> str:
        self._check_position(index)
        name = self.state.headers[index]
        keep = [i for i in range(len(self.state.headers)) if i != index]

        to_delete = list(self.state.columns_to_delete)
        if name not in to_delete:
            to_delete.append(name)

        self.undo_mgr.push_undo()
        self.state.apply(
            df=self.state.df.iloc[:, keep].copy(),
            headers=[self.state.headers[i] for i in keep],
            editable_headers=[self.state.editable_headers[i] for i in keep],
            header_errors=[self.state.header_errors[i] for i in keep],
            columns_to_delete=to_delete,
        )
        return name

    # ----- validation -----
    def validate_all(self) -> list[str]:
        errors = validate_headers(self.state.headers, self.state.editable_headers)
        self.state.header_errors = errors
        return list(errors)

    # ----- undo/redo -----
    def undo(self) -> bool:
        return self.undo_mgr.undo()

    def redo(self) -> bool:
        return self.undo_mgr.redo()
