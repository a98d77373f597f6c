import logging
import time

from config_paths import LOG_PATH, ensure_config_dirs, load_config
from editor_context import EditorContext
from log_setup import setup_logging
from navigation_guard import ExitGuard, NavigationGuard
from save_workflow import SaveWorkflow
from session_undo import SessionUndo
from table_editing import TableEditingSession
from table_session import TableSession
from table_store import RemoteTableStore
from transport_worker import InlineRunner, TransportWorker

logger = logging.getLogger(__name__)


class TableEditor:
    """Entry point for a host UI: table editing, navigation guard, save workflow and exit guard."""

    def __init__(self, store, runner=None, set_status_cb=None, undo_max_depth: int = 50):
        self.state = TableSession()
        self.status_msg = None
        self.status_msg_until = 0

        self.ctx = EditorContext(
            state=self.state,
            store=store,
            runner=runner if runner is not None else InlineRunner(),
            _set_status=set_status_cb if set_status_cb is not None else self._set_status,
            undo_max_depth=undo_max_depth,
        )
        self.undo_mgr = SessionUndo(self.ctx)
        self.editing = TableEditingSession(self.ctx, self.undo_mgr)
        self.navigation = NavigationGuard(self.ctx, self.editing)
        self.saving = SaveWorkflow(self.ctx, self.editing)
        self.exit_guard = ExitGuard(self.state)

    # ---------------- helpers ----------------

    def _set_status(self, msg, duration=3):
        self.status_msg = msg
        self.status_msg_until = time.time() + duration

    def _sync(self):
        self.exit_guard.sync()

    # ---------------- read-only views ----------------

    @property
    def selected_table(self):
        return self.state.selected_table

    @property
    def rows(self):
        return self.state.rows

    @property
    def headers(self):
        return list(self.state.headers)

    @property
    def editable_headers(self):
        return list(self.state.editable_headers)

    @property
    def header_errors(self):
        return list(self.state.header_errors)

    @property
    def columns_to_delete(self):
        return list(self.state.columns_to_delete)

    @property
    def is_dirty(self) -> bool:
        return self.state.is_dirty

    @property
    def pending_table(self):
        return self.ctx.pending_table

    @property
    def show_confirm_prompt(self) -> bool:
        return self.ctx.save_prompt_visible

    @property
    def show_navigate_prompt(self) -> bool:
        return self.ctx.navigate_prompt_visible

    @property
    def last_error(self):
        return self.ctx.last_error

    @property
    def busy(self) -> bool:
        return self.ctx.busy

    # ---------------- host loop ----------------

    def poll(self) -> int:
        """Apply finished store calls; call from the host event loop."""
        handled = self.ctx.runner.drain()
        if handled:
            self._sync()
        return handled

    def request_exit(self, confirm_cb) -> bool:
        return self.exit_guard.request_exit(confirm_cb)

    # ---------------- navigation ----------------

    def handle_table_click(self, table_name: str) -> bool:
        switched = self.navigation.request_table(table_name)
        self._sync()
        return switched

    def confirm_navigate(self):
        self.navigation.confirm()
        self._sync()

    def cancel_navigate(self):
        self.navigation.cancel()

    # ---------------- saving ----------------

    def handle_save(self) -> bool:
        return self.saving.request_save()

    def confirm_save(self) -> bool:
        issued = self.saving.confirm_save()
        self._sync()
        return issued

    def cancel_save(self):
        self.saving.cancel_save()

    # ---------------- edits ----------------

    def handle_cell_change(self, row_index: int, header: str, value):
        self.editing.set_cell(row_index, header, value)
        self._sync()

    def handle_data_change(self, rows):
        self.editing.replace_rows(rows)
        self._sync()

    def handle_add_row(self):
        self.editing.add_row()
        self._sync()

    def handle_add_column(self) -> str:
        name = self.editing.add_column()
        self._sync()
        return name

    def handle_header_change(self, index: int, text: str):
        self.editing.rename_header_input(index, text)
        self._sync()

    def handle_delete_column(self, index: int) -> str:
        name = self.editing.delete_column(index)
        self._sync()
        return name

    def undo(self) -> bool:
        done = self.editing.undo()
        self._sync()
        return done

    def redo(self) -> bool:
        done = self.editing.redo()
        self._sync()
        return done


def create_editor(config=None, set_status_cb=None, background: bool = True) -> TableEditor:
    """Build an editor wired to the configured HTTP endpoints."""
    ensure_config_dirs()
    cfg = config if config is not None else load_config()
    setup_logging(cfg.get("LOG_LEVEL", "INFO"), LOG_PATH)

    store = RemoteTableStore(
        cfg["FETCH_URL"],
        cfg["PERSIST_URL"],
        timeout=cfg.get("TIMEOUT_SECONDS", 10),
    )
    runner = TransportWorker() if background else InlineRunner()
    logger.info(
        "editor ready: fetch=%s persist=%s background=%s",
        store.fetch_url,
        store.persist_url,
        background,
    )
    return TableEditor(
        store,
        runner=runner,
        set_status_cb=set_status_cb,
        undo_max_depth=cfg.get("UNDO_MAX_DEPTH", 50),
    )
