from typing import List, Optional
from sqlmodel import Session, select, col
from sqlalchemy.exc import SQLAlchemyError

from domain.models.song import Song
from domain.errors import NotFoundError, StorageError
from utils.logger import get_logger

logger = get_logger(__name__)

# OFFSET は BIGINT。これを超えるページに行は存在しない
MAX_OFFSET = 2**63 - 1

class SongRepository:
    def __init__(self, session: Session):
        self.session = session

    def _fail(self, operation: str, e: SQLAlchemyError) -> StorageError:
        self.session.rollback()
        logger.error(f"Error {operation}: {e}")
        # str(SQLAlchemyError) には SQL文とパラメータが含まれるため、ドライバのエラーだけを残す
        cause = getattr(e, "orig", None) or e
        return StorageError(f"{operation}: {cause}")

    def get_by_id(self, song_id: int) -> Optional[Song]:
        try:
            return self.session.get(Song, song_id)
        except SQLAlchemyError as e:
            raise self._fail("fetching song", e) from e

    def find_all(
        self,
        group: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
        song: Optional[str] = None,
    ) -> List[Song]:
        """group / song 名の部分一致 (大文字小文字を区別しない) とページングで楽曲を取得する"""
        query = select(Song)
        if group:
            query = query.where(col(Song.group).ilike(f"%{group}%"))
        if song:
            query = query.where(col(Song.song_name).ilike(f"%{song}%"))

        offset = (page - 1) * limit
        if offset > MAX_OFFSET:
            return []

        query = query.order_by(Song.id).offset(offset).limit(limit)

        try:
            return list(self.session.exec(query).all())
        except SQLAlchemyError as e:
            raise self._fail("querying songs", e) from e

    def create(self, song: Song) -> Song:
        try:
            self.session.add(song)
            self.session.commit()
            self.session.refresh(song)
        except SQLAlchemyError as e:
            raise self._fail("creating song", e) from e
        return song

    def update(self, song: Song) -> Song:
        """id が一致する行の全フィールドを置き換える"""
        db_song = self.get_by_id(song.id)
        if not db_song:
            raise NotFoundError(f"no song found with id {song.id}")

        db_song.group = song.group
        db_song.song_name = song.song_name
        db_song.release_date = song.release_date
        db_song.text = song.text
        db_song.link = song.link

        try:
            self.session.add(db_song)
            self.session.commit()
            self.session.refresh(db_song)
        except SQLAlchemyError as e:
            raise self._fail("updating song", e) from e
        return db_song

    def delete(self, song_id: int):
        db_song = self.get_by_id(song_id)
        if not db_song:
            raise NotFoundError(f"no song found with id {song_id}")

        try:
            self.session.delete(db_song)
            self.session.commit()
        except SQLAlchemyError as e:
            raise self._fail("deleting song", e) from e

    def fetch_text(self, song_id: int) -> str:
        try:
            text = self.session.exec(select(Song.text).where(Song.id == song_id)).first()
        except SQLAlchemyError as e:
            raise self._fail("fetching song text", e) from e

        # first() は行が無ければ None、text 列が NULL の場合も None
        if text is None:
            if not self.get_by_id(song_id):
                raise NotFoundError(f"no song found with id {song_id}")
            return ""
        return text
