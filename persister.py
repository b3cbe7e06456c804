import logging
import os
import shutil
import tempfile
import time
from typing import Callable, Optional, Sequence

from csv_serializer import has_changed, serialize

logger = logging.getLogger(__name__)


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def backup_path_for(path: str, now_ms: int, backup_dir: Optional[str] = None) -> str:
    base = os.path.basename(path)
    if base.lower().endswith(".csv"):
        base = base[:-4]
    directory = backup_dir if backup_dir else tempfile.gettempdir()
    return os.path.join(directory, f"{base}-{now_ms}.csv")


class Persister:
    """Writes canonical CSV over the original file, keeping a backup first.

    ``last_saved`` only advances once the new content has been renamed into
    place; any failure along the way propagates and leaves it stale so the
    next save retries instead of being skipped.
    """

    def __init__(
        self,
        path: str,
        last_saved: str = "",
        backup_dir: Optional[str] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.path = path
        self.last_saved = last_saved
        self.backup_dir = backup_dir
        self._clock = clock

    def save(self, rows: Sequence[Sequence[str]]) -> str:
        data = serialize(rows)
        if not has_changed(data, self.last_saved):
            logger.info("Skipping save as contents of table have not changed.")
            return self.last_saved

        directory = os.path.dirname(os.path.abspath(self.path))
        fd, tmp_path = tempfile.mkstemp(suffix=".csv", dir=directory)
        try:
            if os.path.exists(self.path):
                backup = backup_path_for(
                    self.path, int(self._clock() * 1000), self.backup_dir
                )
                logger.info("Saving backup to %s", backup)
                os.makedirs(os.path.dirname(backup), exist_ok=True)
                shutil.copyfile(self.path, backup)
                # mkstemp creates 0600; keep the original's permissions
                shutil.copymode(self.path, tmp_path)
            else:
                os.chmod(tmp_path, 0o666 & ~_current_umask())

            logger.info("Saving to %s", tmp_path)
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as fh:
                fd = None
                fh.write(data + "\n")
                fh.flush()
                os.fsync(fh.fileno())

            logger.info("Overwriting %s", self.path)
            os.replace(tmp_path, self.path)
            tmp_path = None
        finally:
            if fd is not None:
                os.close(fd)
            if tmp_path is not None:
                try:
                    os.unlink(tmp_path)
                except OSError:
                    pass

        self.last_saved = data
        return self.last_saved


def save(
    rows: Sequence[Sequence[str]],
    original_path: str,
    last_saved: str,
    backup_dir: Optional[str] = None,
) -> str:
    return Persister(original_path, last_saved, backup_dir=backup_dir).save(rows)
