"""
CSV record parsing for bulk ingestion
"""
import csv
import io
from typing import Callable, Iterator, List, Sequence, TypeVar

from ..domain.exceptions import BadRequestError
from ..domain.models import Chair, Estate

T = TypeVar("T")


class RecordMapper:
    """Reads the fields of one CSV record left to right"""

    def __init__(self, record: Sequence[str]):
        self.record = record
        self.offset = 0

    def _next(self) -> str:
        if self.offset >= len(self.record):
            raise BadRequestError(f"too few fields in record: {len(self.record)}")
        value = self.record[self.offset]
        self.offset += 1
        return value

    def next_int(self) -> int:
        value = self._next()
        try:
            return int(value)
        except ValueError:
            raise BadRequestError(f"invalid integer field: {value!r}")

    def next_float(self) -> float:
        value = self._next()
        try:
            return float(value)
        except ValueError:
            raise BadRequestError(f"invalid float field: {value!r}")

    def next_string(self) -> str:
        return self._next()


def estate_from_record(record: Sequence[str]) -> Estate:
    rm = RecordMapper(record)
    return Estate(
        id=rm.next_int(),
        name=rm.next_string(),
        description=rm.next_string(),
        thumbnail=rm.next_string(),
        address=rm.next_string(),
        latitude=rm.next_float(),
        longitude=rm.next_float(),
        rent=rm.next_int(),
        door_height=rm.next_int(),
        door_width=rm.next_int(),
        features=rm.next_string(),
        popularity=rm.next_int(),
    )


def chair_from_record(record: Sequence[str]) -> Chair:
    rm = RecordMapper(record)
    return Chair(
        id=rm.next_int(),
        name=rm.next_string(),
        description=rm.next_string(),
        thumbnail=rm.next_string(),
        price=rm.next_int(),
        height=rm.next_int(),
        width=rm.next_int(),
        depth=rm.next_int(),
        color=rm.next_string(),
        features=rm.next_string(),
        kind=rm.next_string(),
        popularity=rm.next_int(),
        stock=rm.next_int(),
    )


def _rows(content: bytes) -> Iterator[List[str]]:
    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError:
        raise BadRequestError("CSV file must be UTF-8 encoded")
    try:
        for row in csv.reader(io.StringIO(text)):
            if row:
                yield row
    except csv.Error as e:
        raise BadRequestError(f"failed to read csv: {e}")


def parse_records(content: bytes, mapper: Callable[[Sequence[str]], T]) -> List[T]:
    """Parse every non-empty CSV row with ``mapper``"""
    return [mapper(row) for row in _rows(content)]
