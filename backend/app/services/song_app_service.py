from typing import List, Optional
from datetime import datetime
from sqlmodel import Session

from domain.models.song import Song
from domain.errors import ValidationError, NotFoundError, SongLibraryError
from domain.services.verse_pager import (
    clamp_page,
    clamp_limit,
    paginate_verses,
    LIST_DEFAULT_LIMIT,
    LIST_MAX_LIMIT,
    TEXT_DEFAULT_LIMIT,
    TEXT_MAX_LIMIT,
)
from infra.repositories.song_repository import SongRepository
from infra.clients.song_info_client import SongInfoClient
from api.schemas.song import SongCreate, SongUpdate
from utils.logger import get_logger

logger = get_logger(__name__)

RELEASE_DATE_FORMAT = "%d.%m.%Y"

def today_release_date() -> str:
    return datetime.now().strftime(RELEASE_DATE_FORMAT)

def _wrap(error: SongLibraryError, context: str) -> SongLibraryError:
    """同じ種類のエラーのまま、メッセージに文脈を付け足す"""
    return type(error)(f"{context}: {error}")

class SongAppService:
    def __init__(self, session: Session, info_client: SongInfoClient):
        self.session = session
        self.repository = SongRepository(session)
        self.info_client = info_client

    @staticmethod
    def _validate_id(song_id: int):
        if song_id <= 0:
            raise ValidationError("invalid song ID")

    @staticmethod
    def _normalize_names(group: str, song: str):
        group = (group or "").strip()
        song = (song or "").strip()
        if not group or not song:
            raise ValidationError("group and song name cannot be empty")
        return group, song

    def list_songs(
        self,
        group: Optional[str] = None,
        page: int = 1,
        limit: int = LIST_DEFAULT_LIMIT,
        song: Optional[str] = None,
    ) -> List[Song]:
        page = clamp_page(page)
        limit = clamp_limit(limit, LIST_MAX_LIMIT, LIST_DEFAULT_LIMIT)

        logger.info(f"Fetching songs for group: {group}, page: {page}, limit: {limit}")
        try:
            return self.repository.find_all(group=group, page=page, limit=limit, song=song)
        except SongLibraryError as e:
            logger.error(f"Error in list_songs: {e}")
            raise _wrap(e, "failed to retrieve songs") from e

    def get_song(self, song_id: int) -> Song:
        self._validate_id(song_id)
        song = self.repository.get_by_id(song_id)
        if not song:
            raise NotFoundError(f"no song found with id {song_id}")
        return song

    def create_song(self, request: SongCreate) -> Song:
        group, song_name = self._normalize_names(request.group, request.song)

        # 外部APIで公開日・歌詞・リンクを補完する。失敗した場合は何も保存しない
        try:
            details = self.info_client.get_details(group, song_name)
        except SongLibraryError as e:
            logger.error(f"Error fetching song details from external API: {e}")
            raise _wrap(e, "failed to fetch song details") from e

        song = Song(
            group=group,
            song_name=song_name,
            release_date=details.release_date or today_release_date(),
            text=details.text,
            link=details.link,
        )

        try:
            created = self.repository.create(song)
        except SongLibraryError as e:
            logger.error(f"Error creating song in repository: {e}")
            raise _wrap(e, "failed to create song") from e

        logger.info(f"Created song: {created.song_name} by {created.group}")
        return created

    def update_song(self, song_id: int, data: SongUpdate) -> Song:
        self._validate_id(song_id)
        group, song_name = self._normalize_names(data.group, data.song)

        song = Song(
            id=song_id,
            group=group,
            song_name=song_name,
            release_date=data.release_date or today_release_date(),
            text=data.text,
            link=data.link,
        )

        try:
            updated = self.repository.update(song)
        except SongLibraryError as e:
            logger.error(f"Error updating song: {e}")
            raise _wrap(e, "failed to update song") from e

        logger.info(f"Updated song ID: {song_id}")
        return updated

    def delete_song(self, song_id: int):
        self._validate_id(song_id)

        try:
            self.repository.delete(song_id)
        except SongLibraryError as e:
            logger.error(f"Error deleting song: {e}")
            raise _wrap(e, "failed to delete song") from e

        logger.info(f"Deleted song ID: {song_id}")

    def get_song_text(self, song_id: int, page: int = 1, limit: int = TEXT_DEFAULT_LIMIT) -> str:
        self._validate_id(song_id)
        page = clamp_page(page)
        limit = clamp_limit(limit, TEXT_MAX_LIMIT, TEXT_DEFAULT_LIMIT)

        try:
            full_text = self.repository.fetch_text(song_id)
            return paginate_verses(full_text, page, limit)
        except SongLibraryError as e:
            logger.error(f"Error getting song text: {e}")
            raise _wrap(e, "failed to retrieve song text") from e
