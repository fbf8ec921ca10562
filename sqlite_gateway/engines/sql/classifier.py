"""
Resolve the effective query type of a statement.
"""

from sqlite_gateway.models import QueryTypeEnum

# Priority order: first keyword found anywhere in the statement wins.
_KEYWORD_ORDER: tuple[QueryTypeEnum, ...] = (
    QueryTypeEnum.SELECT,
    QueryTypeEnum.INSERT,
    QueryTypeEnum.UPDATE,
    QueryTypeEnum.DELETE,
    QueryTypeEnum.CREATE,
)


def classify(query: str, query_type: QueryTypeEnum | str = QueryTypeEnum.AUTO) -> QueryTypeEnum:
    """
    Return query_type unless it is AUTO; then detect it from the statement text.

    Detection is a substring test on the uppercased text, not a parse: a
    'SELECT' inside a string literal, comment or subquery still counts. No
    keyword found -> AUTO (run through the generic execute path).
    """
    qt = QueryTypeEnum(query_type)
    if qt != QueryTypeEnum.AUTO:
        return qt
    text = (query or "").strip().upper()
    for candidate in _KEYWORD_ORDER:
        if candidate.value in text:
            return candidate
    return QueryTypeEnum.AUTO
