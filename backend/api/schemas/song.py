from pydantic import BaseModel
from typing import Optional

from domain.models.song import Song

class SongCreate(BaseModel):
    group: str
    song: str

class SongUpdate(BaseModel):
    """PUT 用。レコード全体を置き換えるため、省略されたフィールドは空文字になる"""
    group: str = ""
    song: str = ""
    release_date: str = ""
    text: str = ""
    link: str = ""

class SongRead(BaseModel):
    id: Optional[int] = None
    group: str
    song: str
    release_date: str = ""
    text: str = ""
    link: str = ""

    @classmethod
    def from_model(cls, song: Song) -> "SongRead":
        return cls(
            id=song.id,
            group=song.group,
            song=song.song_name,
            release_date=song.release_date or "",
            text=song.text or "",
            link=song.link or "",
        )

class SongTextRead(BaseModel):
    song_id: int
    page: int
    text: str

class SongMessage(BaseModel):
    message: str
    song_id: int
