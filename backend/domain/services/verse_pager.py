from typing import List

from domain.errors import OutOfRangeError

# 歌詞の節 (verse) の区切り = 空行
VERSE_SEPARATOR = "\n\n"

LIST_DEFAULT_LIMIT = 10
LIST_MAX_LIMIT = 100
TEXT_DEFAULT_LIMIT = 3
TEXT_MAX_LIMIT = 10


def clamp_page(page: int) -> int:
    return page if page >= 1 else 1


def clamp_limit(limit: int, maximum: int, default: int) -> int:
    """範囲 [1, maximum] 外の limit はデフォルト値に置き換える (切り詰めではない)"""
    if limit < 1 or limit > maximum:
        return default
    return limit


def split_verses(text: str) -> List[str]:
    return text.split(VERSE_SEPARATOR)


def join_verses(verses: List[str]) -> str:
    return VERSE_SEPARATOR.join(verses)


def paginate_verses(text: str, page: int, limit: int) -> str:
    """
    歌詞を空行で節に分割し、page 番目のウィンドウを返す。
    page / limit は呼び出し側でクランプ済みであること。
    """
    verses = split_verses(text)

    start = (page - 1) * limit
    end = min(len(verses), start + limit)

    if start >= len(verses):
        raise OutOfRangeError(
            f"page {page} out of range: song has {len(verses)} verses"
        )

    return join_verses(verses[start:end])
