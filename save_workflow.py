import logging

from errors import PersistRejected
from header_validation import all_valid

logger = logging.getLogger(__name__)


class SaveWorkflow:
    """Two-step save: validate and open the prompt, then persist on confirm."""

    def __init__(self, ctx, editing):
        self.ctx = ctx
        self.editing = editing

    @property
    def prompt_visible(self) -> bool:
        return self.ctx.save_prompt_visible

    def request_save(self) -> bool:
        if self.ctx.busy:
            self.ctx._set_status("Busy; try again when the current request finishes", 3)
            return False
        errors = self.editing.validate_all()
        if not all_valid(errors):
            bad = sum(1 for err in errors if err)
            logger.debug("save blocked by header errors: %s", errors)
            self.ctx._set_status(
                f"Fix {bad} column title{'s' if bad != 1 else ''} before saving", 3
            )
            return False
        self.ctx.save_prompt_visible = True
        return True

    def build_payload(self) -> dict:
        state = self.ctx.state
        return {
            "table": state.selected_table,
            "data": state.rows,
            "columnsToDelete": list(state.columns_to_delete),
        }

    def confirm_save(self) -> bool:
        """Send the payload to the store. Returns True if a persist call was issued."""
        state = self.ctx.state
        if self.ctx.busy:
            self.ctx._set_status("Busy; try again when the current request finishes", 3)
            return False
        if state.selected_table is None:
            self.ctx.save_prompt_visible = False
            self.ctx._set_status("No table selected", 3)
            return False

        payload = self.build_payload()
        generation = state.generation
        revision = state.revision
        logger.debug("data to save: %s", payload)

        self.ctx.save_in_flight = True
        store = self.ctx.store
        self.ctx.runner.submit(
            lambda: store.persist_table(
                payload["table"], payload["data"], payload["columnsToDelete"]
            ),
            lambda result: self._save_done(generation, revision, payload, result),
            lambda exc: self._save_failed(payload, exc),
        )
        return True

    def cancel_save(self):
        self.ctx.save_prompt_visible = False

    def _save_done(self, generation, revision, payload, result):
        self.ctx.save_in_flight = False
        self.ctx.save_prompt_visible = False
        table = payload["table"]
        state = self.ctx.state
        if generation != state.generation:
            logger.info("save of %s finished after a reload; session left as loaded", table)
            return
        state.mark_saved(payload["columnsToDelete"], revision)
        self.editing.undo_mgr.clear()
        self.ctx.last_error = None
        logger.info("table %s updated: %s", table, result)
        self.ctx._set_status(f"Saved {table}", 3)

    def _save_failed(self, payload, exc):
        self.ctx.save_in_flight = False
        self.ctx.save_prompt_visible = False
        self.ctx.last_error = exc
        if isinstance(exc, PersistRejected):
            logger.error(
                "error updating table %s: %s\nrequest: %s\nresponse: %s",
                payload["table"],
                exc,
                exc.request_body,
                exc.response_body,
            )
        else:
            logger.error("error saving table %s: %s", payload["table"], exc)
        self.ctx._set_status(f"Save failed: {exc}", 4)
