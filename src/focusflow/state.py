"""Application state container shared by the stores."""

from __future__ import annotations

from dataclasses import dataclass, field

from focusflow.models import IdAllocator, Task, Thought


@dataclass
class AppState:
    """The three mutable roots: thought log, task collection, active day.

    Owned by the application root and handed to each store by reference.
    """

    ids: IdAllocator
    active_date: str
    thoughts: dict[str, list[Thought]] = field(default_factory=dict)
    tasks: dict[int, Task] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for entries in self.thoughts.values():
            for thought in entries:
                self.ids.observe(thought.id)
        for task_id in self.tasks:
            self.ids.observe(task_id)
