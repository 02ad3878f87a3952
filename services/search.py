"""검색어 LIKE 필터 헬퍼.

사용자 입력의 %, _ 는 와일드카드가 아닌 문자 그대로 비교한다.
"""

LIKE_ESCAPE = "\\"


def like_pattern(term):
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def contains(column, term):
    """column LIKE '%term%' (이스케이프 적용)."""
    return column.like(like_pattern(term), escape=LIKE_ESCAPE)
