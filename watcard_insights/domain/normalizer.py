"""Transaction normalization - turns untrusted raw records into canonical transactions"""

import logging
import math
import re
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Tuple
from watcard_insights.domain.exceptions import (
    InvalidTransactionDataError,
    MalformedBatchError,
    UnparsableAmountError,
)
from watcard_insights.domain.models import CanonicalTransaction, NormalizationResult, Rejection
from watcard_insights.domain.terminals import categorize

logger = logging.getLogger(__name__)

_CURRENCY_PREFIX = re.compile(r"^([+-]?)\s*[$€£¥]")
_NUMERIC_PREFIX = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")
_DATE_SHAPE = re.compile(r"^(\d{4}-\d{2}-\d{2})(?: (\d{2}):(\d{2})(?::(\d{2}))?)?$")


def parse_amount(value: Any) -> Tuple[float, bool]:
    """
    Parse a raw amount into (absolute value, has minus sign).

    Strings lose a leading currency symbol and thousands separators, then the
    longest numeric prefix is read, so "$-9.99" -> (9.99, True) and
    "$50.00" -> (50.0, False).

    Raises:
        UnparsableAmountError: No finite number could be read
    """
    if isinstance(value, bool) or value is None:
        raise UnparsableAmountError(f"Amount is not a number: {value!r}")

    if isinstance(value, (int, float)):
        amount = float(value)
        negative = amount < 0 or math.copysign(1.0, amount) < 0
    elif isinstance(value, str):
        text = value.strip()
        negative = "-" in text
        text = _CURRENCY_PREFIX.sub(r"\1", text).replace(",", "").strip()
        match = _NUMERIC_PREFIX.match(text)
        if not match:
            raise UnparsableAmountError(f"Amount is not a number: {value!r}")
        amount = float(match.group(0))
    else:
        raise UnparsableAmountError(f"Amount is not a number: {value!r}")

    if not math.isfinite(amount):
        raise UnparsableAmountError(f"Amount is not finite: {value!r}")

    return abs(amount), negative


def _validate_date(value: Any) -> str:
    if not isinstance(value, str):
        raise InvalidTransactionDataError(f"Date is missing or not a string: {value!r}")

    date_str = value.strip()
    match = _DATE_SHAPE.match(date_str)
    if not match:
        raise InvalidTransactionDataError(f"Date is not 'YYYY-MM-DD HH:MM:SS': {value!r}")

    ymd, hour, minute, second = match.groups()
    try:
        datetime.strptime(ymd, "%Y-%m-%d")
    except ValueError as e:
        raise InvalidTransactionDataError(f"Date is not a calendar date: {value!r}") from e

    if hour is not None and (int(hour) > 23 or int(minute) > 59 or int(second or 0) > 59):
        raise InvalidTransactionDataError(f"Time is out of range: {value!r}")

    return date_str


def _validate_terminal(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidTransactionDataError(f"Terminal is not a string: {value!r}")
    return value.strip()


def normalize_transaction(raw: Mapping) -> CanonicalTransaction:
    """
    Validate and coerce one raw record.

    An explicit boolean isDeposit is trusted; otherwise a record is a deposit
    when its amount carries no minus sign. The category is always derived from
    the terminal here, any category on the raw record is ignored.

    Raises:
        InvalidTransactionDataError: Missing/malformed date or terminal
        UnparsableAmountError: Amount cannot be parsed
    """
    date_str = _validate_date(raw.get("date"))
    terminal = _validate_terminal(raw.get("terminal"))
    amount, negative = parse_amount(raw.get("amount"))

    explicit = raw.get("isDeposit")
    is_deposit = explicit if isinstance(explicit, bool) else not negative

    return CanonicalTransaction(
        date=date_str,
        terminal=terminal,
        amount=amount,
        is_deposit=is_deposit,
        category=categorize(terminal),
    )


def normalize_batch(payload: Any) -> NormalizationResult:
    """
    Normalize a whole ingested batch.

    Bad records are dropped and reported as rejections; the batch itself
    must be a list of objects.

    Raises:
        MalformedBatchError: Payload is not a list of record-shaped values
    """
    if not isinstance(payload, list):
        raise MalformedBatchError("Expected a JSON array of transaction records")

    for index, raw in enumerate(payload):
        if not isinstance(raw, Mapping):
            raise MalformedBatchError(f"Record {index} is not an object")

    result = NormalizationResult()
    for index, raw in enumerate(payload):
        try:
            result.transactions.append(normalize_transaction(raw))
        except InvalidTransactionDataError as e:
            logger.debug("Rejected record", extra={"index": index, "reason": str(e)})
            result.rejections.append(Rejection(index=index, reason=str(e)))

    return result
