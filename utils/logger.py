# logger.py
import os, glob, logging
from contextvars import ContextVar

_EVAL_I = ContextVar("eval_i", default=-1)

LOGGER_NAMES = [
    "main",
    "engine",
    "controller",
    "config",
    "fuzzifier",
    "rule_engine",
    "defuzzifier",
    "profiler",
]


def set_eval_index(i: int) -> None:
    """Stamps subsequent log records with the index of the current evaluation."""
    _EVAL_I.set(int(i))


class EvalIndexFilter(logging.Filter):
    def filter(self, record):
        # ensure every record has .i
        record.i = _EVAL_I.get()
        return True


def setup_logging(
    log_dir: str = "logs",
    overwrite: bool = True,
    log_level: int = logging.DEBUG,
    console_level: int = logging.INFO,
    cleanup_rotated: bool = True,
) -> None:
    """
    One log file per component logger under log_dir, plus console output for "main".

    Library modules only create their named loggers; handlers are attached here.
    """
    os.makedirs(log_dir, exist_ok=True)
    if cleanup_rotated:
        for path in glob.glob(os.path.join(log_dir, "*.log.*")):
            try:
                os.remove(path)
            except OSError:
                logging.getLogger("main").debug("Could not remove %s", path)

    fmt = logging.Formatter("%(i)06d | %(levelname)s | %(name)s | %(message)s")

    console = logging.StreamHandler()
    console.setFormatter(fmt)
    console.setLevel(console_level)
    console.addFilter(EvalIndexFilter())

    for name in LOGGER_NAMES:
        log = logging.getLogger(name)
        log.setLevel(log_level)
        log.propagate = False
        for h in list(log.handlers):
            log.removeHandler(h)
            h.close()

        mode = "w" if overwrite else "a"
        fh = logging.FileHandler(os.path.join(log_dir, f"{name}.log"), mode=mode, encoding="utf-8")
        fh.setFormatter(fmt)
        fh.setLevel(log_level)
        fh.addFilter(EvalIndexFilter())
        log.addHandler(fh)

    logging.getLogger("main").addHandler(console)
    logging.getLogger("main").info("Logging system initialized.")
