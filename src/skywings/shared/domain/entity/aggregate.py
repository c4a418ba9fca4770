from abc import ABC
from typing import Generic, TypeVar

ID = TypeVar("ID")


class AggregateRoot(ABC, Generic[ID]):
    """集約ルートの基底クラス

    同一性は ID のみで判定する。version は変更のたびに1つ進み、
    レポジトリの条件付き書き込み（楽観ロック）に使われる。
    """

    def __init__(self, id: ID, version: int = 1) -> None:
        self._id = id
        self._version = version

    @property
    def id(self) -> ID:
        return self._id

    @property
    def version(self) -> int:
        return self._version

    def _touch(self) -> None:
        """状態を変更したら呼び出す"""
        self._version += 1

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return False
        return self._id == other._id

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._id))
