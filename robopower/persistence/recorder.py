"""
recorder.py
Implements event recording for Robo Power games. Stores the stream of GameEvent objects published by an engine
for replay, analysis, or persistence. InMemoryRecorder is used for tests and in-memory analysis.
Related modules:
- events.py: Defines the GameEvent types.
- serializer.py: Used for saving/loading events.
"""

from typing import List

from ..core.events import EVENT_TYPES, GameEvent
from . import serializer


class InMemoryRecorder:
    """
    Records GameEvent objects in memory, in the order they were published.
    Methods:
        attach(engine): Subscribe to every event type of an engine.
        record(event): Add a new event.
        events(): Get all recorded events.
        dumps(): Serialize the recorded events to a JSON string.
        flush(): No-op for in-memory; used in file/DB recorders.
    """
    def __init__(self):
        self._events: List[GameEvent] = []

    def attach(self, engine) -> None:
        """Subscribe to every event type published by engine."""
        for event_type in EVENT_TYPES:
            engine.on_event_of_type(event_type, self.record)

    def record(self, event: GameEvent) -> None:
        """Add a new event to the recorder."""
        self._events.append(event)

    def events(self):
        """Return all recorded events as a list."""
        return list(self._events)

    def dumps(self) -> str:
        return serializer.dumps([serializer.event_to_dict(e) for e in self._events])

    def flush(self):
        """No-op for in-memory recorder."""
        pass
