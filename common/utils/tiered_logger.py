"""
Tiered logging system for the photoelectric effect simulator.

Provides three output tiers:
- Tier 1 (student): status line shown by the presentation layer, plain language
- Tier 2 (info): Console output, sweep timing and parameters
- Tier 3 (debug): Log file only, full technical details for staff debugging

Staff debug mode promotes debug messages to console.
"""

import logging
from pathlib import Path
from typing import Optional, Callable, List, Dict, Any
from logging.handlers import RotatingFileHandler


class TieredLogger:
    """
    Tiered logging system for the simulator.

    Routes messages to appropriate outputs based on audience:
    - student(): status callback, plain language
    - info(): Console, brief technical info
    - debug(): File only (or console in staff mode)

    Usage:
        logger = TieredLogger("photoelectric")
        logger.student("Measuring at -1.2 V...")
        logger.info("Sweep: 51 points, 10 rounds each")
        logger.debug("Seed 42, noise level 0.05")
    """

    _instances: Dict[str, 'TieredLogger'] = {}
    _staff_debug_mode: bool = False

    def __init__(
        self,
        name: str,
        log_dir: Optional[Path] = None,
        gui_callback: Optional[Callable[[str], None]] = None,
        stats_callback: Optional[Callable[[Any], None]] = None,
        error_callback: Optional[Callable[[str, str, List[str], List[str]], None]] = None
    ):
        """
        Initialize the tiered logger.

        Args:
            name: Logger name (e.g., "photoelectric")
            log_dir: Directory for the debug log file (no file logging if None)
            gui_callback: Callback for student-tier messages (status line)
            stats_callback: Callback for measurement statistics
            error_callback: Callback for error prompts (title, message, causes, actions)
        """
        self.name = name
        self.log_dir = log_dir
        self.gui_callback = gui_callback
        self.stats_callback = stats_callback
        self.error_callback = error_callback

        self._setup_logging()

        TieredLogger._instances[name] = self

    def _setup_logging(self) -> None:
        """Configure Python logging handlers."""
        self._logger = logging.getLogger(f"photoelectric_sim.{self.name}")
        self._logger.setLevel(logging.DEBUG)
        self._logger.handlers.clear()

        # Console handler (INFO level by default)
        self._console_handler = logging.StreamHandler()
        self._console_handler.setLevel(
            logging.DEBUG if TieredLogger._staff_debug_mode else logging.INFO
        )
        console_format = logging.Formatter(
            '%(asctime)s %(message)s',
            datefmt='%H:%M:%S'
        )
        self._console_handler.setFormatter(console_format)
        self._logger.addHandler(self._console_handler)

        if self.log_dir is not None:
            self.add_file_handler(self.log_dir)

    def add_file_handler(self, log_dir: Path) -> Optional[Path]:
        """
        Attach a rotating debug log file in log_dir.

        Returns:
            Path of the log file, or None if it could not be opened
        """
        log_file = Path(log_dir) / f"{self.name}_debug.log"
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=5*1024*1024,  # 5 MB
                backupCount=3
            )
        except OSError as e:
            self._logger.warning(f"Debug log file unavailable ({log_file}): {e}")
            return None

        file_handler.setLevel(logging.DEBUG)
        file_format = logging.Formatter(
            '%(asctime)s [%(levelname)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        file_handler.setFormatter(file_format)
        self._logger.addHandler(file_handler)
        self.log_dir = Path(log_dir)
        return log_file

    @classmethod
    def get_logger(cls, name: str) -> 'TieredLogger':
        """Get or create a logger instance by name."""
        if name not in cls._instances:
            cls._instances[name] = TieredLogger(name)
        return cls._instances[name]

    @classmethod
    def set_staff_debug_mode(cls, enabled: bool) -> None:
        """
        Enable or disable staff debug mode.

        When enabled, DEBUG-level messages appear in console.
        """
        cls._staff_debug_mode = enabled
        for logger in cls._instances.values():
            if enabled:
                logger._console_handler.setLevel(logging.DEBUG)
            else:
                logger._console_handler.setLevel(logging.INFO)

    @classmethod
    def is_staff_debug_mode(cls) -> bool:
        """Check if staff debug mode is enabled."""
        return cls._staff_debug_mode

    def set_gui_callback(self, callback: Optional[Callable[[str], None]]) -> None:
        """Set callback for student-tier messages."""
        self.gui_callback = callback

    def set_stats_callback(self, callback: Optional[Callable[[Any], None]]) -> None:
        """Set callback for measurement statistics display."""
        self.stats_callback = callback

    def set_error_callback(
        self,
        callback: Optional[Callable[[str, str, List[str], List[str]], None]]
    ) -> None:
        """Set callback for error prompts."""
        self.error_callback = callback

    # -------------------------------------------------------------------------
    # Tier 1: Student-facing messages
    # -------------------------------------------------------------------------

    def student(self, message: str) -> None:
        """
        Log a student-facing message.

        These should be plain language, connected to the physics and
        actionable when relevant.

        Args:
            message: Student-friendly status message
        """
        self._logger.info(f"[STUDENT] {message}")

        if self.gui_callback:
            try:
                self.gui_callback(message)
            except Exception as e:
                self._logger.debug(f"Status callback failed: {e}")

    def student_stats(self, stats: Any) -> None:
        """
        Display measurement statistics to students.

        Args:
            stats: Statistics object providing format_for_console()
        """
        self._logger.info(stats.format_for_console())

        if self.stats_callback:
            try:
                self.stats_callback(stats)
            except Exception as e:
                self._logger.debug(f"Stats callback failed: {e}")

    def student_error(
        self,
        title: str,
        message: str,
        causes: Optional[List[str]] = None,
        actions: Optional[List[str]] = None
    ) -> None:
        """
        Show an error prompt with actionable guidance.

        Every error students see should answer:
        1. What happened?
        2. Why might it have happened?
        3. What should I do?

        Args:
            title: Short error title
            message: Explanation of what went wrong
            causes: List of possible causes
            actions: List of suggested actions
        """
        causes = causes or []
        actions = actions or []

        self._logger.error(f"{title}: {message}")
        for cause in causes:
            self._logger.error(f"  Possible cause: {cause}")
        for action in actions:
            self._logger.error(f"  Suggested action: {action}")

        if self.error_callback:
            try:
                self.error_callback(title, message, causes, actions)
            except Exception as e:
                self._logger.debug(f"Error callback failed: {e}")

    # -------------------------------------------------------------------------
    # Tier 2: Console messages (INFO level)
    # -------------------------------------------------------------------------

    def info(self, message: str) -> None:
        """Log an informational message to console."""
        self._logger.info(message)

    def warning(self, message: str) -> None:
        """
        Log a warning message.

        Appears in console and file. Use for measurement quality issues,
        configuration warnings and recoverable problems.
        """
        self._logger.warning(message)

    def error(self, message: str) -> None:
        """
        Log an error message (technical, for staff).

        For student-facing errors, use student_error() instead.
        """
        self._logger.error(message)

    # -------------------------------------------------------------------------
    # Tier 3: Debug messages (file only, unless staff mode)
    # -------------------------------------------------------------------------

    def debug(self, message: str) -> None:
        """
        Log a debug message.

        Only visible in the log file, or the console when staff debug mode
        is enabled. Use for seeds, per-sample values and algorithm parameters.
        """
        self._logger.debug(message)


# Convenience function for getting a logger
def get_logger(name: str) -> TieredLogger:
    """Get or create a TieredLogger instance."""
    return TieredLogger.get_logger(name)
