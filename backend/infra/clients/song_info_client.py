import requests
from pydantic import BaseModel, ConfigDict, Field, AliasChoices

from config import settings
from domain.errors import ExternalAPIError, DecodeError
from utils.logger import get_logger

logger = get_logger(__name__)

class SongDetail(BaseModel):
    """外部 song info API が返す楽曲メタデータ"""
    model_config = ConfigDict(extra="ignore")

    release_date: str = Field(default="", validation_alias=AliasChoices("release_date", "releaseDate"))
    text: str = ""
    link: str = ""

class SongInfoClient:
    """
    外部楽曲情報APIのクライアント。
    リトライは行わず、タイムアウトのみで応答待ちを打ち切る。
    """

    def __init__(self, base_url: str, timeout: float):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def get_details(self, group: str, song: str) -> SongDetail:
        url = f"{self.base_url}/info"
        logger.info(f"Requesting song info: group={group!r}, song={song!r}")

        try:
            response = requests.get(
                url,
                params={"group": group, "song": song},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Error making request to {url}: {e}")
            raise ExternalAPIError(f"request to song info API failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise ExternalAPIError(f"external API returned status {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Error parsing response: {e}")
            raise DecodeError(f"invalid JSON from song info API: {e}") from e

        if not isinstance(data, dict):
            raise DecodeError("song info API response is not a JSON object")

        # null は空文字として扱う
        cleaned = {k: v for k, v in data.items() if v is not None}
        try:
            return SongDetail.model_validate(cleaned)
        except ValueError as e:
            raise DecodeError(f"unexpected song info payload: {e}") from e

def get_song_info_client() -> SongInfoClient:
    """FastAPI の Depends 用ファクトリ。テストでは dependency_overrides で差し替える"""
    return SongInfoClient(settings.API_BASE_URL, settings.API_TIMEOUT)
