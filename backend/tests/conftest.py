import os
import pytest
import sys
import tempfile
import uuid
from typing import Generator
from sqlmodel import Session, create_engine

# 1. パス解決: backendディレクトリをsys.pathに追加
CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
BACKEND_DIR = os.path.dirname(CURRENT_DIR)
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

# 設定読み込み前に、デフォルトDB・ログの出力先を一時ディレクトリへ向ける
TEST_DATA_DIR = os.path.join(tempfile.gettempdir(), "music_library_test")
os.environ.setdefault("USER_DATA_DIR", TEST_DATA_DIR)
for _key in ("DATABASE_URL", "DB_HOST"):
    os.environ.pop(_key, None)

from infra.database.schema import init_raw_db
from infra.clients.song_info_client import SongInfoClient, SongDetail

@pytest.fixture(name="engine", scope="function")
def engine_fixture():
    """
    テストごとに完全に独立したDB環境（物理ファイル）を構築する。
    """
    unique_id = str(uuid.uuid4())
    test_db_path = os.path.join(tempfile.gettempdir(), f"music_library_test_{unique_id}.duckdb")

    engine = create_engine(f"duckdb:///{test_db_path}")
    init_raw_db(engine)

    yield engine

    # テスト終了後のクリーンアップ
    engine.dispose()
    if os.path.exists(test_db_path):
        try:
            os.remove(test_db_path)
        except OSError:
            pass

@pytest.fixture(name="session", scope="function")
def session_fixture(engine) -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session

@pytest.fixture(name="info_client")
def info_client_fixture(mocker):
    """外部 song info API のモック。デフォルトでは完全なメタデータを返す"""
    client = mocker.MagicMock(spec=SongInfoClient)
    client.get_details.return_value = SongDetail(
        release_date="16.07.2006",
        text="Ooh baby, don't you know I suffer?\nOoh baby, can you hear me moan?\n\nOoh\nYou set my soul alight",
        link="https://www.youtube.com/watch?v=Xsp3_a-PMTw",
    )
    return client

@pytest.fixture(name="client")
def client_fixture(session: Session, info_client, mocker) -> Generator:
    """FastAPIのTestClientを提供し、DBセッションと外部APIクライアントをDIで差し替える"""
    from fastapi.testclient import TestClient
    from main import app
    from infra.database.connection import get_session
    from infra.clients.song_info_client import get_song_info_client

    # アプリ起動時の init_db が本番用エンジンに対して走らないようモック化
    mocker.patch("main.init_db")
    mocker.patch("main.close_db")

    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_song_info_client] = lambda: info_client
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
