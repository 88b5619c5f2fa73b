import pytest
from sqlmodel import Session
from domain.models.song import Song
from sqlalchemy import text
from sqlalchemy.exc import OperationalError
from domain.errors import NotFoundError, StorageError
from infra.repositories.song_repository import SongRepository
from infra.database.schema import init_raw_db

def _seed(session: Session):
    songs = [
        Song(group="Muse", song_name="Supermassive Black Hole", release_date="16.07.2006", text="v1\n\nv2"),
        Song(group="Muse", song_name="Uprising", release_date="07.09.2009", text="u1"),
        Song(group="Radiohead", song_name="Creep", release_date="21.09.1992", text="c1\n\nc2\n\nc3"),
        Song(group="The Muser Band", song_name="Hello", release_date="01.01.2020", text=""),
    ]
    for s in songs:
        session.add(s)
    session.commit()
    for s in songs:
        session.refresh(s)
    return songs

def test_create_assigns_id(session: Session):
    repo = SongRepository(session)
    song = repo.create(Song(group="Muse", song_name="Hysteria", release_date="01.12.2003"))
    assert song.id is not None
    assert session.get(Song, song.id).song_name == "Hysteria"

def test_find_all_group_filter_is_case_insensitive_substring(session: Session):
    _seed(session)
    repo = SongRepository(session)

    songs = repo.find_all(group="mUsE", page=1, limit=10)
    groups = {s.group for s in songs}
    assert groups == {"Muse", "The Muser Band"}

def test_find_all_song_filter(session: Session):
    _seed(session)
    repo = SongRepository(session)

    songs = repo.find_all(song="creep", page=1, limit=10)
    assert [s.song_name for s in songs] == ["Creep"]

def test_find_all_pagination(session: Session):
    seeded = _seed(session)
    repo = SongRepository(session)

    first = repo.find_all(page=1, limit=3)
    second = repo.find_all(page=2, limit=3)
    assert [s.id for s in first] == [s.id for s in seeded[:3]]
    assert [s.id for s in second] == [seeded[3].id]
    assert repo.find_all(page=3, limit=3) == []

def test_find_all_no_match_is_empty(session: Session):
    _seed(session)
    assert SongRepository(session).find_all(group="Nirvana") == []

def test_update_replaces_all_fields(session: Session):
    seeded = _seed(session)
    repo = SongRepository(session)
    target = seeded[1]

    repo.update(Song(id=target.id, group="MUSE", song_name="Uprising (Live)", release_date="", text="new", link=""))

    session.refresh(target)
    assert target.group == "MUSE"
    assert target.song_name == "Uprising (Live)"
    assert target.release_date == ""
    assert target.text == "new"

def test_update_missing_song(session: Session):
    repo = SongRepository(session)
    with pytest.raises(NotFoundError):
        repo.update(Song(id=9999, group="g", song_name="s"))

def test_delete(session: Session):
    seeded = _seed(session)
    repo = SongRepository(session)
    song_id = seeded[0].id

    repo.delete(song_id)
    assert session.get(Song, song_id) is None

def test_delete_missing_song(session: Session):
    with pytest.raises(NotFoundError):
        SongRepository(session).delete(9999)

def test_fetch_text(session: Session):
    seeded = _seed(session)
    repo = SongRepository(session)
    assert repo.fetch_text(seeded[2].id) == "c1\n\nc2\n\nc3"
    assert repo.fetch_text(seeded[3].id) == ""

def test_fetch_text_missing_song(session: Session):
    with pytest.raises(NotFoundError):
        SongRepository(session).fetch_text(9999)

def test_storage_error_keeps_only_driver_message(session: Session, mocker):
    mocker.patch.object(
        session,
        "get",
        side_effect=OperationalError("SELECT songs.id FROM songs WHERE songs.id = $1", (1,), Exception("database is locked")),
    )

    with pytest.raises(StorageError) as exc_info:
        SongRepository(session).get_by_id(1)
    assert str(exc_info.value) == "fetching song: database is locked"

def test_find_all_offset_overflow_returns_empty(session: Session):
    _seed(session)
    assert SongRepository(session).find_all(page=2**63 - 1, limit=100) == []

def test_init_raw_db_is_idempotent(engine):
    # 起動のたびに呼ばれるので、既存テーブルとデータを壊さないこと
    with Session(engine) as session:
        SongRepository(session).create(Song(group="Muse", song_name="Hysteria"))

    init_raw_db(engine)

    with Session(engine) as session:
        repo = SongRepository(session)
        assert [s.song_name for s in repo.find_all()] == ["Hysteria"]
        assert repo.create(Song(group="Muse", song_name="Uprising")).id is not None

    with engine.connect() as conn:
        tables = {row[0] for row in conn.execute(text("SELECT table_name FROM information_schema.tables"))}
    assert "songs" in tables
    assert "schema_info" not in tables
