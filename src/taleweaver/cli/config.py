"""CLI configuration constants."""


class LogLevel:
    """Log level constants with numeric values for comparison.

    Standard logging hierarchy: DEBUG < INFO < WARNING < ERROR
    Lower numeric value = more verbose (shows more messages).
    """

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    _names = {
        DEBUG: "DEBUG",
        INFO: "INFO",
        WARNING: "WARNING",
        ERROR: "ERROR",
    }

    _from_string = {
        "debug": DEBUG,
        "info": INFO,
        "warning": WARNING,
        "error": ERROR,
    }

    _styles = {
        DEBUG: "dim",
        INFO: "cyan",
        WARNING: "yellow",
        ERROR: "red",
    }

    @classmethod
    def name(cls, level: int) -> str:
        """Get the name for a log level."""
        return cls._names.get(level, "UNKNOWN")

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Convert string to log level. Returns DEBUG if invalid."""
        return cls._from_string.get(level_str.lower(), cls.DEBUG)

    @classmethod
    def style(cls, level: int) -> str:
        """Rich style used to print a log level."""
        return cls._styles.get(level, "")


# Story session commands
QUIT_COMMANDS = ("/quit", "exit", "quit", "q")
RETRY_COMMAND = "/retry"

LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
