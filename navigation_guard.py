import logging

logger = logging.getLogger(__name__)

UNSAVED_CHANGES_MESSAGE = "There are unsaved changes. Leave without saving?"


class NavigationGuard:
    """Intercepts table switches while the session holds unsaved edits."""

    def __init__(self, ctx, editing):
        self.ctx = ctx
        self.editing = editing

    @property
    def prompt_visible(self) -> bool:
        return self.ctx.navigate_prompt_visible

    @property
    def pending_table(self):
        return self.ctx.pending_table

    def request_table(self, table_name: str) -> bool:
        """Switch to ``table_name`` now if clean; otherwise ask first. Returns True on switch."""
        if self.ctx.state.is_dirty:
            logger.debug("switch to %s held: unsaved changes", table_name)
            self.ctx.pending_table = table_name
            self.ctx.navigate_prompt_visible = True
            return False
        return self.editing.load(table_name) is not None

    def confirm(self):
        pending = self.ctx.pending_table
        if pending:
            current = self.ctx.state.selected_table
            if self.editing.load(pending) is None:
                # load refused; keep the prompt so the user can confirm again
                return
            logger.info("switching from %s to %s without saving", current, pending)
            self.ctx.pending_table = None
        self.ctx.navigate_prompt_visible = False

    def cancel(self):
        self.ctx.pending_table = None
        self.ctx.navigate_prompt_visible = False


class ExitGuard:
    """Asks before the host exits while unsaved changes exist.

    Listeners are told whenever the guard arms or disarms so a host can hook
    its own quit confirmation in and out alongside the dirty flag.
    """

    def __init__(self, state):
        self.state = state
        self.armed = False
        self._listeners = []

    def add_listener(self, cb):
        self._listeners.append(cb)

    def remove_listener(self, cb):
        if cb in self._listeners:
            self._listeners.remove(cb)

    def sync(self):
        armed = bool(self.state.is_dirty)
        if armed == self.armed:
            return
        self.armed = armed
        for cb in list(self._listeners):
            cb(armed)

    def request_exit(self, confirm_cb) -> bool:
        self.sync()
        if not self.armed:
            return True
        return bool(confirm_cb(UNSAVED_CHANGES_MESSAGE))
