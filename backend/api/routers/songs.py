from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session
from typing import List, Optional

from infra.database.connection import get_session
from infra.clients.song_info_client import SongInfoClient, get_song_info_client
from api.schemas.song import SongCreate, SongUpdate, SongRead, SongTextRead, SongMessage
from api.error_handlers import ApiError
from app.services.song_app_service import SongAppService
from domain.errors import SongLibraryError

router = APIRouter(tags=["songs"])

# 64bit 符号付き整数に収まらない値は数値として扱わない (DBに渡すとオーバーフローする)
INT64_MIN = -2**63
INT64_MAX = 2**63 - 1

def _to_int64(value: Optional[str]) -> int:
    number = int(value)
    if not INT64_MIN <= number <= INT64_MAX:
        raise ValueError(f"{value!r} is out of range")
    return number

def _parse_int(value: Optional[str], default: int) -> int:
    """page / limit は数値でなければデフォルト値にフォールバックする"""
    if value is None:
        return default
    try:
        return _to_int64(value)
    except ValueError:
        return default

def _parse_song_id(value: Optional[str]) -> int:
    try:
        return _to_int64(value)
    except (TypeError, ValueError):
        raise ApiError(400, "Invalid song ID", f"song id must be an integer, got {value!r}")

def get_song_service(
    session: Session = Depends(get_session),
    info_client: SongInfoClient = Depends(get_song_info_client),
) -> SongAppService:
    return SongAppService(session, info_client)

@router.get("/api/songs", response_model=List[SongRead])
def get_songs(
    group: Optional[str] = Query(None, description="Case-insensitive substring of the group name"),
    song: Optional[str] = Query(None, description="Case-insensitive substring of the song name"),
    page: Optional[str] = Query(None, description="Page number (default 1)"),
    limit: Optional[str] = Query(None, description="Songs per page, 1-100 (default 10)"),
    service: SongAppService = Depends(get_song_service),
):
    try:
        songs = service.list_songs(
            group=group,
            page=_parse_int(page, 1),
            limit=_parse_int(limit, 10),
            song=song,
        )
    except SongLibraryError as e:
        raise ApiError.from_domain("Failed to retrieve songs", e)
    return [SongRead.from_model(s) for s in songs]

@router.get("/api/song/text", response_model=SongTextRead)
def get_song_text(
    song_id: Optional[str] = Query(None, description="Song ID"),
    page: Optional[str] = Query(None, description="Verse page number (default 1)"),
    limit: Optional[str] = Query(None, description="Verses per page, 1-10 (default 3)"),
    service: SongAppService = Depends(get_song_service),
):
    """歌詞を空行区切りの節単位でページングして返す"""
    parsed_id = _parse_song_id(song_id)
    parsed_page = _parse_int(page, 1)

    try:
        text = service.get_song_text(parsed_id, parsed_page, _parse_int(limit, 3))
    except SongLibraryError as e:
        raise ApiError.from_domain("Failed to retrieve song text", e)

    return SongTextRead(song_id=parsed_id, page=parsed_page, text=text)

@router.get("/api/song/{song_id}", response_model=SongRead)
def get_song(song_id: str, service: SongAppService = Depends(get_song_service)):
    parsed_id = _parse_song_id(song_id)
    try:
        song = service.get_song(parsed_id)
    except SongLibraryError as e:
        raise ApiError.from_domain("Failed to retrieve song", e)
    return SongRead.from_model(song)

@router.post("/api/song", response_model=SongRead, status_code=status.HTTP_201_CREATED)
def create_song(request: SongCreate, service: SongAppService = Depends(get_song_service)):
    """外部APIで補完した楽曲を登録する"""
    try:
        song = service.create_song(request)
    except SongLibraryError as e:
        raise ApiError.from_domain("Failed to create song", e)
    return SongRead.from_model(song)

@router.put("/api/song/{song_id}", response_model=SongMessage)
def update_song(song_id: str, data: SongUpdate, service: SongAppService = Depends(get_song_service)):
    parsed_id = _parse_song_id(song_id)
    try:
        service.update_song(parsed_id, data)
    except SongLibraryError as e:
        raise ApiError.from_domain("Failed to update song", e)
    return SongMessage(message="Song updated successfully", song_id=parsed_id)

@router.delete("/api/song/{song_id}", response_model=SongMessage)
def delete_song(song_id: str, service: SongAppService = Depends(get_song_service)):
    parsed_id = _parse_song_id(song_id)
    try:
        service.delete_song(parsed_id)
    except SongLibraryError as e:
        raise ApiError.from_domain("Failed to delete song", e)
    return SongMessage(message="Song deleted successfully", song_id=parsed_id)
