"""Vacation date-range extraction from free-text remarks."""
import logging
import re
from datetime import date, timedelta
from typing import List

from roster_audit.utilities import config
from roster_audit.utilities.models import RemarkParseResult, VacationRange

logger = logging.getLogger(__name__)

DATE_PATTERN = re.compile(r"(\d{1,2})[./-](\d{1,2})[./-](\d{2,4})")


def token_to_date(match: re.Match) -> date:
    """
    Convert a day/month/year token to a date.

    Two-digit years are taken as 2000s. Out-of-range day or month values roll
    into the neighbouring month or year (31/02/2025 becomes 2025-03-03).
    """
    day, month, year = (int(part) for part in match.groups())
    if year < 100:
        year += 2000
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    return date(year, month, 1) + timedelta(days=day - 1)


class DateRangeExtractor:
    """
    Pair date tokens in a remark into vacation ranges.

    Tokens are paired strictly in the order they appear: 1st with 2nd, 3rd
    with 4th and so on. A remark listing several ranges must therefore write
    them as start, end, start, end. Out-of-order or annotated multi-range
    remarks are paired positionally all the same and may misparse.
    """

    def __init__(
        self,
        single_date_problem: str = config.SINGLE_DATE_PROBLEM,
        unpaired_problem: str = config.UNPAIRED_DATES_PROBLEM,
        invalid_problem: str = config.INVALID_DATE_PROBLEM,
    ):
        self.single_date_problem = single_date_problem
        self.unpaired_problem = unpaired_problem
        self.invalid_problem = invalid_problem

    def extract(self, text: str) -> RemarkParseResult:
        """
        Extract vacation ranges from a remark.

        Args:
            text: Free-text remark

        Returns:
            RemarkParseResult with ranges, problems and the token count
        """
        result = RemarkParseResult()
        if not text:
            return result

        tokens: List[re.Match] = list(DATE_PATTERN.finditer(text))
        result.token_count = len(tokens)
        if not tokens:
            return result

        for first, second in zip(tokens[0::2], tokens[1::2]):
            try:
                result.ranges.append(self._build_range(first, second))
            except (ValueError, OverflowError):
                logger.debug("Date outside calendar range in %r", text)
                if self.invalid_problem not in result.problems:
                    result.problems.append(self.invalid_problem)

        if len(tokens) == 1:
            result.problems.append(self.single_date_problem)
        elif len(tokens) % 2:
            result.problems.append(self.unpaired_problem)

        return result

    @staticmethod
    def _build_range(first: re.Match, second: re.Match) -> VacationRange:
        start, end = token_to_date(first), token_to_date(second)
        if end < start:
            start, end = end, start
        return VacationRange(
            start_date=start,
            end_date=end,
            duration=(end - start).days + 1,
            original_text=f"{first.group(0)} - {second.group(0)}",
        )
