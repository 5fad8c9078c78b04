import logging
import sys
from pathlib import Path


def setup_logging(level: str = "INFO", log_dir: str | Path | None = None) -> None:
    """
    Configure root logging once, before the app starts serving.

    - Console handler on stderr at `level`
    - File handler (DEBUG, everything) only when `log_dir` is given
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if log_dir else level)

    # Remove any pre-existing handlers to avoid duplicates (uvicorn reload re-imports us).
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    root.addHandler(ch)

    if log_dir:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_dir / "taskboard.log"), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(fmt)
        root.addHandler(fh)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)

    # SQL echo is noisy; only surface engine problems.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
