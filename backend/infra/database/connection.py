from sqlmodel import create_engine, Session
import os
from config import settings
from infra.database.schema import init_raw_db
from utils.logger import get_logger

logger = get_logger(__name__)

DATABASE_URL = settings.database_url
DB_PATH = settings.DB_PATH

# DuckDB の場合のみローカルファイルのディレクトリを用意する
if settings.is_duckdb:
    os.makedirs(os.path.dirname(DB_PATH), exist_ok=True)

# エンジンはプロセス全体で1つ。コネクションプールは SQLAlchemy のデフォルト設定に任せる
engine = create_engine(DATABASE_URL, echo=False, pool_pre_ping=True)

def init_db():
    """
    アプリケーション起動時のDB初期化。
    main.py の lifespan イベントから呼び出されます。
    """
    try:
        init_raw_db(engine)
    except Exception as e:
        logger.error(f"Error during database initialization: {e}")
        raise

def close_db():
    engine.dispose()

def get_session():
    with Session(engine) as session:
        yield session
