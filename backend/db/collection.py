from typing import Any, Callable, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel

ModelT = TypeVar("ModelT", bound=BaseModel)


class Collection(Generic[ModelT]):
    """Insertion-ordered table of records keyed by a store-assigned integer id.

    Ids start at 1 and only ever grow, so an id is never handed out twice
    even after the record holding it has been removed.
    """

    def __init__(self, name: str, model: Type[ModelT]):
        self.name = name
        self.model = model
        self._rows: Dict[int, ModelT] = {}
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._rows)

    def get(self, record_id: Optional[int]) -> Optional[ModelT]:
        if record_id is None:
            return None
        return self._rows.get(record_id)

    def all(self) -> List[ModelT]:
        return list(self._rows.values())

    def filter(self, predicate: Callable[[ModelT], bool]) -> List[ModelT]:
        return [r for r in self._rows.values() if predicate(r)]

    def insert(self, fields: Dict[str, Any]) -> ModelT:
        record = self.model.model_validate({**fields, "id": self._next_id})
        self._next_id += 1
        self._rows[record.id] = record
        return record

    def replace(self, record: ModelT) -> None:
        # keeps the original position in the insertion order
        if record.id not in self._rows:
            raise KeyError(f"{self.name}: no record with id {record.id}")
        self._rows[record.id] = record

    def remove(self, record_id: int) -> bool:
        return self._rows.pop(record_id, None) is not None

    def remove_where(self, predicate: Callable[[ModelT], bool]) -> int:
        doomed = [r.id for r in self._rows.values() if predicate(r)]
        for record_id in doomed:
            del self._rows[record_id]
        return len(doomed)
