from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")
ID = TypeVar("ID")


class Repository(ABC, Generic[T, ID]):
    """集約レポジトリの基底クラス

    集約は作成時に insert し、以降の変更はサブクラスが定義する
    条件付き更新メソッドで行う（丸ごとの上書き保存は提供しない）。
    """

    @abstractmethod
    def insert(self, aggregate: T) -> None:
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, id: ID) -> T | None:
        raise NotImplementedError

    def exists(self, id: ID) -> bool:
        """ID が使用済みかどうか（実装によっては軽量な読み取りで上書きする）"""
        return self.find_by_id(id) is not None
