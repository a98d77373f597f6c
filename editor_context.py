from dataclasses import dataclass
from typing import Any, Callable, Optional


@dataclass
class EditorContext:
    state: Any
    store: Any
    runner: Any
    _set_status: Callable[[str, float], None]
    undo_max_depth: int = 50

    # Transport bookkeeping
    last_load_id: int = 0
    loading_table: Optional[str] = None
    save_in_flight: bool = False
    last_error: Optional[Exception] = None

    # Prompts
    pending_table: Optional[str] = None
    navigate_prompt_visible: bool = False
    save_prompt_visible: bool = False

    # Undo history
    undo_stack: Optional[list] = None
    redo_stack: Optional[list] = None

    def __post_init__(self):
        if self.undo_stack is None:
            self.undo_stack = []
        if self.redo_stack is None:
            self.redo_stack = []

    @property
    def busy(self) -> bool:
        return self.loading_table is not None or self.save_in_flight
