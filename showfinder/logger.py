"""
Minimal logging context for Showfinder.
Single place to control all output: screen + file, with flush.
"""
import json
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional


class ShowfinderLogger:
    """Minimal logger: print to screen + file, always flush"""

    def __init__(self, log_file: Optional[Path] = None, debug: bool = False, quiet: bool = False):
        self.log_file = log_file
        self._file_handle = None
        self._start_time = datetime.now()
        self.debug_mode = debug
        self.quiet = quiet
        self._rate_limit_note_servers: set[str] = set()

        if log_file:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            self._file_handle = open(log_file, 'w', buffering=1, encoding='utf-8')  # Line buffered, UTF-8

        from showfinder.__version__ import __version__

        welcome = f"({self._start_time.strftime('%H:%M:%S')}  Started Showfinder {__version__})"
        self.log(welcome)

    def log(self, msg: str, prefix: str = ""):
        """Log to screen and file"""
        output = f"{prefix}{msg}" if prefix else msg

        # Screen goes to stderr so --json output stays parseable
        if not self.quiet:
            print(output, file=sys.stderr, flush=True)

        if self._file_handle:
            self._file_handle.write(output + "\n")
            self._file_handle.flush()
            os.fsync(self._file_handle.fileno())

    def info(self, msg: str):
        """Info message"""
        self.log(msg)

    def warning(self, msg: str):
        """Warning message"""
        self.log(msg, "[WARNING] ")

    def error(self, msg: str):
        """Error message"""
        self.log(msg, "[ERROR] ")

    def debug(self, msg: str):
        """Debug message (only shown in debug mode)"""
        if self.debug_mode:
            timestamp = datetime.now().strftime('%H:%M:%S.%f')[:-3]
            self.log(msg, f"[{timestamp}] [DEBUG] ")

    def api_wait(self, server: str, seconds: float):
        """Note once per server that request pacing is active"""
        _ = seconds
        if server in self._rate_limit_note_servers:
            return
        self._rate_limit_note_servers.add(server)
        self.log(f"API rate limiting active for {server}; request pacing is enabled.", "[INFO] ")

    def api_wait_debug(self, server: str, seconds: float):
        """Log API wait details (debug mode only)."""
        self.debug(f"Rate limiting detail: waiting {seconds:.3f}s before next {server} API call")

    def api_retry(self, server: str, attempt: int, max_attempts: int, delay: int):
        """Log API retry"""
        self.log(f"{server} request failed. Retrying in {delay}s... (attempt {attempt}/{max_attempts})", "[WARNING] ")

    def api_failed(self, server: str, max_attempts: int):
        """Log API failure"""
        self.log(f"{server} not responding after {max_attempts} attempts. Aborting.", "[ERROR] ")

    def api_request(self, method: str, url: str, params: dict):
        """Log API request (debug mode only)"""
        if self.debug_mode:
            timestamp = datetime.now().strftime('%H:%M:%S.%f')[:-3]
            self.log(f"API Request: {method} {url}", f"[{timestamp}] ")
            if params:
                redacted = {k: ("***" if k == "api_key" else v) for k, v in params.items()}
                self.log(f"  Params: {json.dumps(redacted, indent=2)}", f"[{timestamp}] ")

    def api_response(self, status: int, data: Optional[dict], elapsed_ms: float):
        """Log API response (debug mode only)"""
        if self.debug_mode:
            timestamp = datetime.now().strftime('%H:%M:%S.%f')[:-3]
            self.log(f"API Response ({elapsed_ms:.0f}ms): Status {status}", f"[{timestamp}] ")
            if data:
                data_str = json.dumps(data, indent=2)
                if len(data_str) > 5000:
                    data_str = data_str[:5000] + "\n  ... (truncated)"
                self.log(f"  Data: {data_str}", f"[{timestamp}] ")

    def cache_stats(self, stats) -> None:
        """Log response cache counters (debug mode only)"""
        self.debug(
            f"Response cache: size={stats.size}, puts={stats.puts}, hits={stats.hits}, "
            f"misses={stats.misses}, evictions={stats.evictions}"
        )

    def close(self):
        """Close file handle with goodbye message"""
        if self._file_handle:
            end_time = datetime.now()
            elapsed = end_time - self._start_time
            goodbye = f"({end_time.strftime('%H:%M:%S')}  Ended session, elapsed {elapsed.total_seconds():.1f}s)"
            self.log(goodbye)
            self._file_handle.close()
            self._file_handle = None

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


# Global instance (set by the CLI)
_logger: Optional[ShowfinderLogger] = None

def set_logger(logger: ShowfinderLogger):
    """Set global logger instance"""
    global _logger
    _logger = logger

def get_logger() -> ShowfinderLogger:
    """Get global logger instance"""
    global _logger
    if _logger is None:
        # Fallback: create stderr-only logger
        _logger = ShowfinderLogger()
    return _logger

# Convenience functions
def log(msg: str):
    get_logger().log(msg)

def info(msg: str):
    get_logger().info(msg)

def warning(msg: str):
    get_logger().warning(msg)

def error(msg: str):
    get_logger().error(msg)

def debug(msg: str):
    get_logger().debug(msg)
