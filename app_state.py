import logging
from enum import Enum

from file_type_handler import IngestError, read_table

logger = logging.getLogger(__name__)


class SessionStatus(Enum):
    IDLE = "idle"
    LOADED = "loaded"
    FAILED = "failed"


class AppState:
    """Holds at most one table or one error for the last submitted path.

    Every submission replaces the whole state; a table and an error are
    never held at the same time.
    """

    def __init__(self, loader=read_table):
        self.loader = loader
        self.table = None
        self.source: str | None = None
        self.error: str | None = None

    def submit(self, path):
        path = (path or "").strip()
        self.table = None
        self.error = None
        if not path:
            self.source = None
            return self.status

        self.source = path
        try:
            table = self.loader(path)
        except IngestError as exc:
            logger.warning("could not open %s: %s", path, exc.message)
            self.error = exc.message
        else:
            self.table = table
        return self.status

    def reload(self):
        return self.submit(self.source)

    @property
    def status(self) -> SessionStatus:
        if self.error is not None:
            return SessionStatus.FAILED
        if self.table is not None:
            return SessionStatus.LOADED
        return SessionStatus.IDLE

    @property
    def has_table(self) -> bool:
        return self.table is not None

    @property
    def has_error(self) -> bool:
        return self.error is not None
