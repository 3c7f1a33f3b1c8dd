def strip_bom(text: str) -> str:
    """Strip UTF-8 BOM from the start of text (spreadsheet exports often include it)."""
    return text.removeprefix("\ufeff")


def drop_first_line(text: str) -> str:
    newline = text.find("\n")
    return "" if newline == -1 else text[newline + 1 :]


def cell(record: dict[str, str], column: str) -> str:
    return (record.get(column) or "").strip()
