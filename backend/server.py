import uvicorn

if __name__ == "__main__":
    # 設定の読み込み (.env も含む) を最初に行う
    from config import settings
    from utils.logger import get_logger

    logger = get_logger("server")

    # mainモジュールからappオブジェクトを直接インポート
    from main import app

    logger.info(f"Starting Music Library server on {settings.HOST}:{settings.PORT}...")
    logger.info(f"Database: {settings.database_url.split('@')[-1]}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, reload=False)
