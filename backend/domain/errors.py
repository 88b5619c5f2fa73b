class SongLibraryError(Exception):
    """楽曲ライブラリ内で発生するエラーの基底クラス"""


class ValidationError(SongLibraryError):
    """入力値が不正 (クライアント側の誤り)"""


class NotFoundError(SongLibraryError):
    """指定IDの楽曲が存在しない"""


class OutOfRangeError(SongLibraryError):
    """歌詞ページが範囲外"""


class StorageError(SongLibraryError):
    """DBへの接続・クエリ失敗"""


class ExternalAPIError(SongLibraryError):
    """外部楽曲情報APIの呼び出し失敗"""


class DecodeError(ExternalAPIError):
    """外部APIのレスポンスがJSONとして解釈できない"""
