# Helpers for building literal substring filters

LIKE_ESCAPE = "\\"

def escape_like(value: str) -> str:
    """Escape LIKE wildcards so ``value`` matches literally"""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )

def contains(column, value: str):
    """Case-insensitive literal substring test on ``column``"""
    return column.ilike(f"%{escape_like(value)}%", escape=LIKE_ESCAPE)
