import math
from abc import ABC, abstractmethod
from numbers import Real
from typing import Any, Callable, Generic, Mapping, Optional, TypeVar

from moneybook.domain import (
    TRANSFER_LABEL,
    UNCATEGORIZED,
    Account,
    AccountId,
    Category,
    CategoryId,
    Record,
    RecordId,
    RecordType,
    new_id,
)
from moneybook.errors import ValidationError

T = TypeVar('T')
U = TypeVar('U')
E = TypeVar('E')


class Maybe(Generic[T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_some(self) -> bool:
        pass

    def is_none(self) -> bool:
        return not self.is_some()


class Some(Maybe[T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return Some(f(self._value))

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_some(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"Some({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Some) and self._value == other._value


class Nothing(Maybe[T]):

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return Nothing()

    def get_or_else(self, default: T) -> T:
        return default

    def is_some(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "Nothing()"

    def __eq__(self, other) -> bool:
        return isinstance(other, Nothing)


class Either(Generic[E, T], ABC):
    """Result of a check that either failed (Left) or produced a value (Right)."""

    @abstractmethod
    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        pass

    @abstractmethod
    def is_right(self) -> bool:
        pass

    def is_left(self) -> bool:
        return not self.is_right()

    @abstractmethod
    def get_or_raise(self) -> T:
        pass


class Right(Either[E, T]):

    def __init__(self, value: T):
        self._value = value

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return f(self._value)

    def is_right(self) -> bool:
        return True

    def get_or_raise(self) -> T:
        return self._value

    def __repr__(self) -> str:
        return f"Right({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Right) and self._value == other._value


class Left(Either[E, T]):

    def __init__(self, error: E):
        self._error = error

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return self

    def is_right(self) -> bool:
        return False

    def get_error(self) -> E:
        return self._error

    def get_or_raise(self) -> T:
        raise self._error

    def __repr__(self) -> str:
        return f"Left({self._error!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Left) and self._error == other._error


def safe_account(accs: Mapping[AccountId, Account], acc_id: Optional[str]) -> Maybe[Account]:
    acc = accs.get(acc_id) if acc_id else None
    return Some(acc) if acc is not None else Nothing()


def safe_category(cats: Mapping[CategoryId, Category], cat_id: Optional[str]) -> Maybe[Category]:
    cat = cats.get(cat_id) if cat_id else None
    return Some(cat) if cat is not None else Nothing()


def _missing(value: Any) -> bool:
    return value is None or value == "" or value == 0


def parse_amount(amount: Any) -> Either[ValidationError, float]:
    if isinstance(amount, bool) or not isinstance(amount, Real):
        return Left(ValidationError("Amount must be a positive number"))
    value = float(amount)
    if not math.isfinite(value) or value <= 0:
        return Left(ValidationError("Amount must be a positive number"))
    return Right(value)


def validate_record(
    mode: Any,
    amount: Any,
    from_account_id: Optional[str],
    to_account_id: Optional[str],
    category_id: Optional[str],
    accs: Mapping[AccountId, Account],
    cats: Mapping[CategoryId, Category],
) -> Either[ValidationError, Record]:
    """Check a commit request against the current accounts and categories.

    Returns Right(record) with a fresh id and resolved label, or Left with the
    first failure. Nothing is mutated here.
    """
    if _missing(mode) or _missing(from_account_id) or _missing(amount):
        return Left(ValidationError("Missing required fields"))

    try:
        record_type = RecordType(mode)
    except ValueError:
        return Left(ValidationError(f"Unknown record type: {mode}"))

    def check_source(value: float) -> Either[ValidationError, float]:
        if safe_account(accs, from_account_id).is_none():
            return Left(ValidationError(f"Unknown account: {from_account_id}"))
        return Right(value)

    def build(value: float) -> Either[ValidationError, Record]:
        if record_type is RecordType.TRANSFER:
            return _build_transfer(value, from_account_id, to_account_id, accs)
        return _build_flow(record_type, value, from_account_id, category_id, cats)

    return parse_amount(amount).bind(check_source).bind(build)


def _build_transfer(
    value: float,
    from_account_id: str,
    to_account_id: Optional[str],
    accs: Mapping[AccountId, Account],
) -> Either[ValidationError, Record]:
    if _missing(to_account_id):
        return Left(ValidationError("Select destination account"))
    if safe_account(accs, to_account_id).is_none():
        return Left(ValidationError(f"Unknown account: {to_account_id}"))
    if to_account_id == from_account_id:
        return Left(ValidationError("Destination must differ from source account"))
    return Right(Record(
        id=RecordId(new_id()),
        type=RecordType.TRANSFER,
        amount=value,
        label=TRANSFER_LABEL,
        from_account_id=AccountId(from_account_id),
        to_account_id=AccountId(to_account_id),
    ))


def _build_flow(
    record_type: RecordType,
    value: float,
    from_account_id: str,
    category_id: Optional[str],
    cats: Mapping[CategoryId, Category],
) -> Either[ValidationError, Record]:
    # the category only labels the record; one that is unknown or of the
    # other type is dropped and the record counts as uncategorized
    category = (
        safe_category(cats, category_id)
        .map(lambda c: c if c.type.value == record_type.value else None)
        .get_or_else(None)
    )
    return Right(Record(
        id=RecordId(new_id()),
        type=record_type,
        amount=value,
        label=(category.name if category else "") or UNCATEGORIZED,
        from_account_id=AccountId(from_account_id),
        category_id=category.id if category else None,
    ))
