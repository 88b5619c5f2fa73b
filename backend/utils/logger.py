import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from config import settings

LOG_FILE_NAME = "music_library.log"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_MAX_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5

def _resolve_level() -> int:
    """LOG_LEVEL の値 (例: "debug", "WARNING") を logging の数値レベルに変換する。不明な値は INFO"""
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    return level if isinstance(level, int) else logging.INFO

def _open_log_file() -> RotatingFileHandler:
    os.makedirs(settings.LOG_DIR, exist_ok=True)
    return RotatingFileHandler(
        os.path.join(settings.LOG_DIR, LOG_FILE_NAME),
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )

def _build_handlers() -> list:
    handlers = [logging.StreamHandler()]
    try:
        handlers.append(_open_log_file())
    except OSError as e:
        # ログディレクトリに書けない環境 (読み取り専用コンテナ等) では標準出力だけで動かす
        print(f"music library: file logging disabled ({e})", file=sys.stderr)
    return handlers

def get_logger(name: str) -> logging.Logger:
    """
    モジュール単位のロガー。初回呼び出し時だけ
    標準エラー出力と LOG_DIR/music_library.log の両方に出力するハンドラを付ける。
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    level = _resolve_level()
    formatter = logging.Formatter(LOG_FORMAT)
    logger.setLevel(level)
    for handler in _build_handlers():
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger
