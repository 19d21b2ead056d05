"""Watch daemon: recompute the status line when a document or preset changes."""

import logging
import signal
import time
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Callable

from .config import get_config
from .manager import get_preset_manager
from .state import get_state

# Logging with rotation
LOG_DIR = Path(__file__).parent.parent / ".logs"
LOG_PATH = LOG_DIR / "watch.log"
LOG_MAX_BYTES = 1024 * 1024  # 1 MB
LOG_BACKUP_COUNT = 2
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(log_path: Path | None = None) -> None:
    """Attach a rotating file handler and a stderr handler, once."""
    if logger.handlers:
        return

    log_path = log_path or LOG_PATH
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logger.setLevel(logging.INFO)

    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
    )
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(file_handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(stream_handler)


class WatchDaemon:
    """Poll a document and re-render its status line on change.

    Each check reads the whole document and recomputes from scratch; the
    last computed line wins.
    """

    def __init__(
        self,
        document_path: Path | str,
        config_path: Path | str | None = None,
        state_path: Path | str | None = None,
        sink: Callable[[str], None] | None = None,
    ):
        self.document_path = Path(document_path)
        self.config = get_config(config_path)
        self.state = get_state(state_path)
        self.manager = get_preset_manager(self.config, self.state)
        self.sink = sink or print
        self.running = False
        self._last_key: tuple | None = None
        self.last_status: str | None = None

    def _change_key(self) -> tuple:
        """Identify the current document revision and active preset."""
        try:
            mtime = self.document_path.stat().st_mtime_ns
        except FileNotFoundError:
            mtime = None
        return mtime, self.state.active_preset_id

    def run_check(self) -> bool:
        """Run a single check cycle. Returns True if the status was re-rendered."""
        try:
            # Reload to pick up preset edits and switches made from the CLI
            self.config.load()
            self.state.load()
            self.manager.refresh_commands()

            key = self._change_key()
            if key == self._last_key:
                return False
            self._last_key = key

            if key[0] is None:
                logger.warning(f"Document not found: {self.document_path}")
                text = None
            else:
                text = self.document_path.read_text(encoding="utf-8")

            self.last_status = self.manager.status_text(text)
            logger.info(self.last_status)
            self.sink(self.last_status)
            return True

        except Exception as e:
            logger.error(f"Error during check: {e}")
            return False

    def run(self, interval: float | None = None) -> None:
        """Run the daemon loop."""
        if interval is None:
            interval = self.config.watch_settings.get("check_interval", 2)
        logger.info(f"Watching {self.document_path} every {interval}s")

        self.running = True

        def handle_signal(signum, frame):
            logger.info("Received shutdown signal")
            self.running = False

        signal.signal(signal.SIGTERM, handle_signal)
        signal.signal(signal.SIGINT, handle_signal)

        while self.running:
            self.run_check()
            time.sleep(interval)

        logger.info("Watcher stopped")

    def run_once(self) -> bool:
        """Run a single check (for testing or one-shot usage)."""
        return self.run_check()


def run_daemon(
    document_path: Path | str,
    config_path: Path | str | None = None,
    state_path: Path | str | None = None,
    interval: float | None = None,
) -> None:
    """Entry point for running the watcher."""
    configure_logging()
    daemon = WatchDaemon(document_path, config_path, state_path)
    daemon.run(interval)
