"""
Logging configuration for the anchoring engine

Includes IndentLogger for tree-style output of the tier fallback chain.
"""

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar

# (depth, closed levels) per thread / task
_indent_state: ContextVar[tuple[int, frozenset[int]]] = ContextVar(
    "anchoring_indent", default=(0, frozenset())
)

_TREE_CHARS = {
    "pipe": "│",
    "branch": "├──",
    "leaf": "└──",
}


class IndentState:
    """Indentation state for hierarchical logging, scoped to the current context"""

    @staticmethod
    def increase() -> None:
        """Increase indentation level"""
        level, closed = _indent_state.get()
        _indent_state.set((level + 1, closed - {level}))

    @staticmethod
    def decrease() -> None:
        """Decrease indentation level"""
        level, closed = _indent_state.get()
        if level > 0:
            _indent_state.set((level - 1, closed | {level - 1}))

    @staticmethod
    def reset() -> None:
        """Reset indentation state (useful for tests)"""
        _indent_state.set((0, frozenset()))

    @staticmethod
    def level() -> int:
        return _indent_state.get()[0]

    @staticmethod
    def get_indent() -> str:
        """Get current indentation string with tree characters"""
        level, closed = _indent_state.get()
        if level == 0:
            return ""

        parts = []
        for i in range(level - 1):
            parts.append("    " if i in closed else f"{_TREE_CHARS['pipe']}   ")
        is_end = (level - 1) in closed
        parts.append(_TREE_CHARS["leaf"] if is_end else _TREE_CHARS["branch"])
        return "".join(parts)


class IndentLogger:
    """Logger wrapper that handles indentation using context-local state"""

    def __init__(self, base_logger: logging.Logger) -> None:
        self._logger = base_logger

    def debug(self, msg: str, *args, **kwargs) -> None:
        """Log debug message with indentation"""
        self._logger.debug(f"{self.indent}{msg}", *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        """Log info message with indentation"""
        self._logger.info(f"{self.indent}{msg}", *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        """Log warning message with indentation"""
        self._logger.warning(f"{self.indent}{msg}", *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        """Log error message with indentation"""
        self._logger.error(f"{self.indent}{msg}", *args, **kwargs)

    def is_enabled_for(self, level: int) -> bool:
        return self._logger.isEnabledFor(level)

    @property
    def indent(self) -> str:
        """Get current indentation string"""
        return IndentState.get_indent()

    @contextmanager
    def indent_block(self, initial_message: str | None = None):
        """
        Context manager for handling indentation blocks

        Args:
            initial_message: Optional message to log at block start
        """
        if initial_message:
            self.debug(initial_message)
        IndentState.increase()
        try:
            yield
        finally:
            IndentState.decrease()


def setup_logging(level=logging.INFO):
    """
    Configure logging for the anchoring engine

    Args:
        level: Logging level (default: INFO)

    Returns:
        IndentLogger: Configured logger with indentation support
    """
    base_logger = logging.getLogger("anchoring")
    base_logger.setLevel(level)

    # Remove existing handlers
    base_logger.handlers = []

    # Console handler with UTF-8 encoding for the tree characters
    # Shares the stdout descriptor without owning it
    stream = open(sys.stdout.fileno(), "w", encoding="utf-8", errors="replace", closefd=False)
    handler = logging.StreamHandler(stream)
    handler.setLevel(level)

    formatter = logging.Formatter("%(levelname)8s %(message)s")
    handler.setFormatter(formatter)

    base_logger.addHandler(handler)

    return IndentLogger(base_logger)


# Default logger with indentation support
logger = IndentLogger(logging.getLogger("anchoring"))
