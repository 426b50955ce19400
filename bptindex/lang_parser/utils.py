import re


def camel_to_snake(name: str) -> str:
    """
    change casing, e.g. InsertStmnt -> insert_stmnt
    """
    return re.sub(r'(?<!^)(?=[A-Z])', '_', name).lower()
