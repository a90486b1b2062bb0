"""
Categorised log for everything the simulator reports.

Managers never print. They publish LogMessage and DebugMessage events; the
LogManager collects them into a bounded history, decides which entries are
visible at the current level and mirrors the visible lines into the
simulator state for whatever front end is showing them.
"""
import os
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Iterable, Optional, TYPE_CHECKING

from ...core.events import DebugMessage, EventType, LogSaveRequested
from ...core.events import LogMessage as LogEvent

if TYPE_CHECKING:
    from ...core.events import EventManager, SimulatorEvent
    from ...core.engine import SimulatorState


class LogCategory(Enum):
    """What part of the simulator a log line is about."""
    SYSTEM = auto()
    VENUE = auto()
    ROSTER = auto()
    ENCOUNTER = auto()
    TURNS = auto()
    DEBUG = auto()
    WARNING = auto()
    ERROR = auto()


class LogLevel(Enum):
    """Severity used to hide low-importance lines."""
    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


CATEGORY_TAGS = {
    LogCategory.SYSTEM: "SYS",
    LogCategory.VENUE: "VEN",
    LogCategory.ROSTER: "RST",
    LogCategory.ENCOUNTER: "ENC",
    LogCategory.TURNS: "TRN",
    LogCategory.DEBUG: "DBG",
    LogCategory.WARNING: "WRN",
    LogCategory.ERROR: "ERR",
}

# Every other category counts as INFO
CATEGORY_LEVELS = {
    LogCategory.DEBUG: LogLevel.DEBUG,
    LogCategory.WARNING: LogLevel.WARNING,
    LogCategory.ERROR: LogLevel.ERROR,
}

LOG_FILE_HEADER = "Coliseum Turn Order Simulator - Log"


@dataclass
class LogEntry:
    """One line of the log."""
    text: str
    category: LogCategory
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def level(self) -> LogLevel:
        return CATEGORY_LEVELS.get(self.category, LogLevel.INFO)

    def format(self, include_timestamp: bool = False, include_category: bool = True) -> str:
        """Render the entry as shown on screen, e.g. ``[RST] Added Slime``."""
        prefix = []
        if include_timestamp:
            prefix.append(self.timestamp.strftime("[%H:%M:%S]"))
        if include_category:
            prefix.append(f"[{CATEGORY_TAGS.get(self.category, '???')}]")
        return " ".join([*prefix, self.text])

    def file_line(self) -> str:
        stamp = self.timestamp.strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
        return f"[{stamp}] [{self.category.name}] {self.text}"


def category_for(event: LogEvent) -> LogCategory:
    """Resolve the category of a published log message.

    Warnings and errors are filed under their severity whatever category the
    publisher named; unknown names fall back to SYSTEM.
    """
    if event.level == LogLevel.ERROR:
        return LogCategory.ERROR
    if event.level == LogLevel.WARNING:
        return LogCategory.WARNING
    return LogCategory.__members__.get(str(event.category).upper(), LogCategory.SYSTEM)


class LogManager:
    """Collects, filters and saves simulator log output."""

    def __init__(
        self,
        event_manager: "EventManager",
        state: "SimulatorState",
        max_messages: int = 1000,
        default_level: LogLevel = LogLevel.INFO
    ):
        """
        Args:
            event_manager: Bus the log events arrive on
            state: Simulator state receiving the visible lines
            max_messages: History length; the oldest entries drop off first
            default_level: Lowest level shown by :meth:`get_messages`
        """
        self.event_manager = event_manager
        self.state = state
        self.messages: deque[LogEntry] = deque(maxlen=max_messages)
        self.log_level = default_level
        self.enabled_categories = set(LogCategory)

        handlers = {
            EventType.LOG_MESSAGE: self._on_log_message,
            EventType.DEBUG_MESSAGE: self._on_debug_message,
            EventType.LOG_SAVE_REQUESTED: self._on_save_request,
        }
        for event_type, handler in handlers.items():
            event_manager.subscribe(event_type, handler, subscriber_name=f"LogManager.{handler.__name__}")

        self._publish_to_state()

    def _on_log_message(self, event: "SimulatorEvent") -> None:
        if isinstance(event, LogEvent):
            self.log(event.message, category_for(event))

    def _on_debug_message(self, event: "SimulatorEvent") -> None:
        if isinstance(event, DebugMessage):
            self.debug(f"[{event.source}] {event.message}")

    def _on_save_request(self, event: "SimulatorEvent") -> None:
        if isinstance(event, LogSaveRequested):
            self.save_log_to_file(event.directory)

    def _publish_to_state(self) -> None:
        self.state.log_data = {
            'messages': [entry.format() for entry in self.get_messages()],
            'debug_enabled': self.is_debug_enabled(),
            'total_messages': len(self.messages),
        }

    # Writing

    def log(self, text: str, category: LogCategory = LogCategory.SYSTEM) -> None:
        self.messages.append(LogEntry(text=text, category=category))
        self._publish_to_state()

    def system(self, text: str) -> None:
        self.log(text, LogCategory.SYSTEM)

    def debug(self, text: str) -> None:
        self.log(text, LogCategory.DEBUG)

    def warning(self, text: str) -> None:
        self.log(text, LogCategory.WARNING)

    def error(self, text: str) -> None:
        self.log(text, LogCategory.ERROR)

    def clear(self) -> None:
        self.messages.clear()
        self._publish_to_state()

    # Reading

    def _is_visible(self, entry: LogEntry) -> bool:
        return entry.category in self.enabled_categories and entry.level.value >= self.log_level.value

    def get_messages(self, count: Optional[int] = None,
                     categories: Optional[Iterable[LogCategory]] = None) -> list[LogEntry]:
        """Most recent entries, oldest first.

        With ``categories`` given, every enabled entry in those categories is
        returned regardless of level; otherwise the current level applies.
        """
        if categories:
            wanted = set(categories) & self.enabled_categories
            selected = [entry for entry in self.messages if entry.category in wanted]
        else:
            selected = [entry for entry in self.messages if self._is_visible(entry)]

        if count is not None:
            return selected[-count:] if count > 0 else []
        return selected

    # Visibility

    def enable_category(self, category: LogCategory) -> None:
        self.enabled_categories.add(category)

    def disable_category(self, category: LogCategory) -> None:
        self.enabled_categories.discard(category)

    def set_log_level(self, level: LogLevel) -> None:
        self.log_level = level
        self._publish_to_state()

    def is_debug_enabled(self) -> bool:
        return LogCategory.DEBUG in self.enabled_categories and self.log_level == LogLevel.DEBUG

    def toggle_debug(self) -> None:
        """Show or hide debug lines."""
        if self.is_debug_enabled():
            self.disable_category(LogCategory.DEBUG)
            self.set_log_level(LogLevel.INFO)
        else:
            self.enable_category(LogCategory.DEBUG)
            self.set_log_level(LogLevel.DEBUG)

    # Saving

    def save_log_to_file(self, log_dir: str = "logs") -> Optional[str]:
        """Write the whole history, hidden lines included, to ``log_dir``.

        Returns:
            The file written, or None when it could not be written
        """
        now = datetime.now()
        filepath = os.path.join(log_dir, f"turns_{now.strftime('%Y%m%d_%H%M%S')}.log")

        lines = [
            LOG_FILE_HEADER,
            f"Generated: {now.strftime('%Y-%m-%d %H:%M:%S')}",
            "=" * 60,
            "",
        ]
        lines.extend(entry.file_line() for entry in self.messages)
        if not self.messages:
            lines.append("No messages to save.")

        try:
            os.makedirs(log_dir, exist_ok=True)
            with open(filepath, 'w', encoding='utf-8') as f:
                f.write("\n".join(lines) + "\n")
        except OSError as e:
            self.error(f"Failed to save log file: {e}")
            return None

        self.system(f"Log saved to {filepath}")
        return filepath
