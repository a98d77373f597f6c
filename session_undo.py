class SessionUndo:
    """Manages undo/redo stacks of session snapshots."""

    def __init__(self, ctx):
        self.ctx = ctx

    # ---------- stack helpers ----------
    def push_undo(self):
        self.ctx.undo_stack.append(self.ctx.state.snapshot())
        if len(self.ctx.undo_stack) > self.ctx.undo_max_depth:
            self.ctx.undo_stack.pop(0)
        self.ctx.redo_stack.clear()

    def clear(self):
        self.ctx.undo_stack.clear()
        self.ctx.redo_stack.clear()

    def _restore(self, snap):
        self.ctx.state.apply(
            df=snap["df"],
            headers=snap["headers"],
            editable_headers=snap["editable_headers"],
            header_errors=snap["header_errors"],
            columns_to_delete=snap["columns_to_delete"],
        )

    # ---------- undo/redo ----------
    def undo(self) -> bool:
        stack = self.ctx.undo_stack
        if not stack:
            self.ctx._set_status("Nothing to undo", 2)
            return False
        self.ctx.redo_stack.append(self.ctx.state.snapshot())
        self._restore(stack.pop())
        remaining = len(stack)
        self.ctx._set_status(f"Undone ({remaining} more)" if remaining else "Undone", 2)
        return True

    def redo(self) -> bool:
        redo_stack = self.ctx.redo_stack
        if not redo_stack:
            self.ctx._set_status("Nothing to redo", 2)
            return False
        self.ctx.undo_stack.append(self.ctx.state.snapshot())
        if len(self.ctx.undo_stack) > self.ctx.undo_max_depth:
            self.ctx.undo_stack.pop(0)
        self._restore(redo_stack.pop())
        remaining = len(redo_stack)
        self.ctx._set_status(f"Redone ({remaining} more)" if remaining else "Redone", 2)
        return True
