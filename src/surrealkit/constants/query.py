"""Query language constants.

Keywords and enums shared by the query builder and the client. These
represent fixed SurrealQL fragments and carry no behavior of their own.
"""

from enum import Enum


class SortDirection(str, Enum):
    """Direction of an ORDER BY entry."""

    ASC = "ASC"
    DESC = "DESC"


class WhereGrouping(str, Enum):
    """How WHERE groups are combined when rendered.

    A group is the set of conditions collected between two ``where()``
    calls. The grouping decides which conjunction joins conditions inside
    a group and which one joins the groups themselves.

    Attributes:
        AND_OF_ORS: ``(a OR b) AND (c)`` - conditions added with ``or_()``
            are alternatives, every ``where()``/``and_()`` narrows further.
        OR_OF_ANDS: ``(a AND b) OR (c)`` - the historical joiners, kept for
            callers that depend on them.
    """

    AND_OF_ORS = "and_of_ors"
    OR_OF_ANDS = "or_of_ands"

    @property
    def inner(self) -> str:
        """Conjunction used between conditions of one group."""
        return "OR" if self is WhereGrouping.AND_OF_ORS else "AND"

    @property
    def outer(self) -> str:
        """Conjunction used between groups."""
        return "AND" if self is WhereGrouping.AND_OF_ORS else "OR"


BEGIN_TRANSACTION = "BEGIN TRANSACTION;"
COMMIT_TRANSACTION = "COMMIT TRANSACTION;"
RELATE_CONTENT_PARAM = "content"
