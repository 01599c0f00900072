"""
debug_trace.py

Debug instrumentation for following markup through the parser and the
materializer.  Enable by setting DEBUG_TRACE = True below (or call
``enable_trace()`` from a host such as ``main.py --trace``).
"""

import sys
import traceback
from datetime import datetime
from functools import wraps

# Set to True to enable debug tracing
DEBUG_TRACE = False

# Set to True to trace individual regex matches (very verbose)
TRACE_MATCH = False

# Log file (None for stderr only)
LOG_FILE = None

_log_file = None


def enable_trace(log_file: str = None, trace_match: bool = False):
    """Turn tracing on at runtime."""
    global DEBUG_TRACE, TRACE_MATCH, LOG_FILE
    DEBUG_TRACE = True
    TRACE_MATCH = trace_match
    if log_file:
        LOG_FILE = log_file


def _get_log_file():
    global _log_file
    if LOG_FILE and _log_file is None:
        try:
            _log_file = open(LOG_FILE, "w", encoding="utf-8")
        except OSError:
            pass
    return _log_file


def trace(msg: str, category: str = "INFO"):
    """Print a trace message with timestamp."""
    if not DEBUG_TRACE:
        return
    if category == "MATCH" and not TRACE_MATCH:
        return

    timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
    line = f"[{timestamp}] [{category}] {msg}"

    print(line, file=sys.stderr, flush=True)

    log_file = _get_log_file()
    if log_file:
        try:
            log_file.write(line + "\n")
            log_file.flush()
        except OSError:
            pass


def trace_exception(msg: str = "Exception"):
    """Print exception info."""
    if not DEBUG_TRACE:
        return
    trace(f"{msg}: {traceback.format_exc()}", "ERROR")


def trace_call(category: str = "CALL"):
    """Decorator to trace function calls.

    The DEBUG_TRACE switch is checked per call, so functions decorated at
    import time still trace after ``enable_trace()``.
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            if not DEBUG_TRACE:
                return func(*args, **kwargs)
            func_name = func.__qualname__
            trace(f">>> {func_name}", category)
            try:
                result = func(*args, **kwargs)
                trace(f"<<< {func_name}", category)
                return result
            except Exception as e:
                trace(f"!!! {func_name} raised {type(e).__name__}: {e}", "ERROR")
                raise
        return wrapper
    return decorator


def close_log():
    """Close log file."""
    global _log_file
    if _log_file:
        try:
            _log_file.close()
        except OSError:
            pass
        _log_file = None
