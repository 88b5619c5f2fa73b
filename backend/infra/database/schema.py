from sqlalchemy import text
from sqlalchemy.engine import Engine
from utils.logger import get_logger

logger = get_logger(__name__)

def get_db_schema_sql() -> str:
    """
    DuckDB と PostgreSQL の両方でそのまま実行できる DDL。
    id の採番は SERIAL ではなく明示的なシーケンスで行う (DuckDB 互換のため)。
    "group" は予約語なので常にクォートする。
    """
    return """
    CREATE SEQUENCE IF NOT EXISTS seq_songs_id START 1;

    CREATE TABLE IF NOT EXISTS songs (
        id INTEGER PRIMARY KEY DEFAULT nextval('seq_songs_id'),
        "group" VARCHAR NOT NULL,
        song_name VARCHAR NOT NULL,
        release_date VARCHAR DEFAULT '',
        text VARCHAR DEFAULT '',
        link VARCHAR DEFAULT ''
    );
    """

def init_raw_db(conn_engine: Engine):
    """songs テーブルを作成する。既に存在する場合は何もしない"""
    logger.info("Initializing songs schema...")
    try:
        with conn_engine.begin() as conn:
            statements = [s.strip() for s in get_db_schema_sql().split(';') if s.strip()]
            for stmt in statements:
                conn.execute(text(stmt))
    except Exception as e:
        logger.error(f"Failed to initialize database schema: {e}")
        raise e
