"""Настройка логирования приложения.

Файлы логов хранятся в директории `LOG_DIR` (по умолчанию `data/logs`
относительно CWD), организованы по дате через TimedRotatingFileHandler.

- Ротация: ежедневно (midnight, UTC).
- Хранение: настраивается через retention_days (по умолчанию 30).
- Уровень: настраивается через level (по умолчанию INFO).
- Пустой log_dir: только консоль (stdout/stderr контейнера).
"""
from __future__ import annotations

import glob
import logging
import os
import time
from logging.handlers import TimedRotatingFileHandler

_LOG_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_LOG_FILE = "app.log"

# Отслеживаем установленные handlers, чтобы при реконфигурации удалять старые.
_file_handler: logging.Handler | None = None
_console_handler: logging.Handler | None = None


def _normalize_level(level: str) -> tuple[str, int]:
    level_str = (level or "INFO").strip().upper()
    if level_str not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        level_str = "INFO"
    return level_str, getattr(logging, level_str, logging.INFO)


def setup_logging(
    level: str = "INFO",
    retention_days: int = 30,
    log_dir: str = "",
) -> None:
    """Настраивает корневой логгер приложения.

    - Файловый handler: ротация по дате (если задан log_dir).
    - Консольный handler: для docker logs / stdout.
    - Уровень применяется ко всем.
    """
    global _file_handler, _console_handler

    level_str, log_level = _normalize_level(level)
    retention_days = max(1, min(365, int(retention_days or 30)))

    root = logging.getLogger()

    # Удаляем предыдущие наши handlers (при реконфигурации)
    if _file_handler is not None and _file_handler in root.handlers:
        root.removeHandler(_file_handler)
        _file_handler.close()
    _file_handler = None
    if _console_handler is not None and _console_handler in root.handlers:
        root.removeHandler(_console_handler)

    formatter = logging.Formatter(_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT)

    ch = logging.StreamHandler()
    ch.setLevel(log_level)
    ch.setFormatter(formatter)
    _console_handler = ch
    root.addHandler(ch)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        fh = TimedRotatingFileHandler(
            os.path.join(log_dir, _LOG_FILE),
            when="midnight",
            interval=1,
            backupCount=retention_days,
            encoding="utf-8",
            utc=True,
        )
        fh.suffix = "%Y-%m-%d"
        fh.setLevel(log_level)
        fh.setFormatter(formatter)
        _file_handler = fh
        root.addHandler(fh)

        # Очистка старых файлов, которые могли остаться от предыдущих retention настроек
        cleanup_old_logs(log_dir, retention_days)

    root.setLevel(log_level)

    # Подавляем слишком шумные логгеры
    logging.getLogger("uvicorn.access").setLevel(max(log_level, logging.WARNING))
    logging.getLogger("ldap3").setLevel(max(log_level, logging.WARNING))

    logging.getLogger("adsoft_api").info(
        "Логирование настроено: уровень=%s, хранение=%d дней, каталог=%s",
        level_str, retention_days, log_dir or "-",
    )


def cleanup_old_logs(log_dir: str, retention_days: int) -> int:
    """Удаляет ротированные файлы логов старше retention_days. Возвращает число удалённых."""
    cutoff = time.time() - (retention_days * 86400)
    removed = 0
    for f in glob.glob(os.path.join(log_dir, f"{_LOG_FILE}.*")):
        try:
            if os.path.getmtime(f) < cutoff:
                os.remove(f)
                removed += 1
        except OSError:
            # файл мог быть удалён параллельно другим воркером
            continue
    return removed
